"""Command-line front end for ArubaOS-Switch management.

Examples:
  # System overview
  arubaswitch --host switch01.example.net --username api --password <PW> status

  # VLAN management
  arubaswitch --host switch01.example.net --username api --password <PW> \\
      vlan create 100 --name servers

  # Tagged VLANs on a port (replaces the current tagged set)
  arubaswitch --host switch01.example.net --username api --password <PW> \\
      port tag 1/1 100 200

  # Power-cycle a PoE device
  arubaswitch --host switch01.example.net --username api --password <PW> poe restart A5
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Any

from tabulate import tabulate

from arubaswitch import configure_logging
from arubaswitch.client import ArubaSwitch
from arubaswitch.config import SwitchConfig
from arubaswitch.exceptions import SwitchError
from arubaswitch.models.enums import LEDMode


def _table(rows: list[dict[str, Any]], columns: list[str]) -> str:
    return tabulate([[row.get(c, "") for c in columns] for row in rows], headers=columns, tablefmt="simple")


def _result(ok: bool, what: str) -> None:
    if ok:
        print(f"{what}: done")
    else:
        print(f"{what}: switch did not confirm the change", file=sys.stderr)
        sys.exit(2)


def cmd_status(switch: ArubaSwitch, args: argparse.Namespace) -> None:
    """Show system status and port overview."""
    status = switch.system.get_system_status()
    rows = [[k, v] for k, v in sorted(status.items()) if not isinstance(v, (dict, list))]
    print("=== System ===")
    print(tabulate(rows, tablefmt="plain"))

    print("\n=== Ports ===")
    print(_table(switch.port.get_ports_status(), ["id", "name", "is_port_enabled", "is_port_up"]))


def cmd_vlan(switch: ArubaSwitch, args: argparse.Namespace) -> None:
    if args.vlan_command == "list":
        print(_table(switch.vlan.get_vlans(), ["vlan_id", "name", "status"]))
    elif args.vlan_command == "create":
        _result(switch.vlan.create_vlan(args.vlan_id, args.name or f"VLAN{args.vlan_id}"), f"create VLAN {args.vlan_id}")
    elif args.vlan_command == "update":
        _result(switch.vlan.update_vlan(args.vlan_id, args.name), f"rename VLAN {args.vlan_id}")
    elif args.vlan_command == "delete":
        _result(switch.vlan.delete_vlan(args.vlan_id), f"delete VLAN {args.vlan_id}")
    else:
        print("Usage: arubaswitch ... vlan {list|create|update|delete}")


def cmd_port(switch: ArubaSwitch, args: argparse.Namespace) -> None:
    if args.port_command == "status":
        if args.port:
            status = switch.port.get_port_status(args.port)
            print(tabulate(sorted(status.items()), tablefmt="plain"))
        else:
            print(_table(switch.port.get_ports_status(), ["id", "name", "is_port_enabled", "is_port_up"]))
        print()
        rows = switch.vlan.get_vlans_port(args.port) if args.port else switch.vlan.get_vlans_ports()
        print(_table(rows, ["port_id", "vlan_id", "port_mode"]))
    elif args.port_command == "enable":
        _result(switch.port.enable_port(args.port), f"enable port {args.port}")
    elif args.port_command == "disable":
        _result(switch.port.disable_port(args.port), f"disable port {args.port}")
    elif args.port_command == "restart":
        _result(switch.port.restart_port(args.port), f"restart port {args.port}")
    elif args.port_command == "untag":
        _result(switch.vlan.set_untagged_vlan(args.vlan_id, args.port), f"untagged VLAN {args.vlan_id} on {args.port}")
    elif args.port_command == "tag":
        _result(switch.vlan.set_tagged_vlans(args.vlan_ids, args.port), f"tagged VLANs on {args.port}")
    else:
        print("Usage: arubaswitch ... port {status|enable|disable|restart|untag|tag}")


def cmd_poe(switch: ArubaSwitch, args: argparse.Namespace) -> None:
    if args.poe_command == "status":
        print(_table(switch.poe.get_ports_poe_status(), ["port_id", "poe_detection_status", "power_drawn_in_watts"]))
    elif args.poe_command == "enable":
        _result(switch.poe.enable_poe_port(args.port), f"enable PoE on {args.port}")
    elif args.poe_command == "disable":
        _result(switch.poe.disable_poe_port(args.port), f"disable PoE on {args.port}")
    elif args.poe_command == "restart":
        _result(switch.poe.restart_poe_port(args.port), f"restart PoE on {args.port}")
    else:
        print("Usage: arubaswitch ... poe {status|enable|disable|restart}")


def cmd_arp(switch: ArubaSwitch, args: argparse.Namespace) -> None:
    if args.arp_command == "list":
        rows = switch.tables.get_arp_table()
    elif args.arp_command == "vlan":
        rows = switch.tables.get_arp_by_vlan(args.vlan_id)
    elif args.arp_command in ("ip", "mac"):
        lookup = switch.tables.get_arp_by_ip if args.arp_command == "ip" else switch.tables.get_arp_by_mac
        entry = lookup(args.address)
        if entry is None:
            print(f"{args.address}: not found")
            return
        rows = [entry]
    else:
        print("Usage: arubaswitch ... arp {list|ip|mac|vlan}")
        return
    print(_table(rows, ["ip_address", "mac_address", "port_id", "vlan_id", "type"]))


def cmd_mac(switch: ArubaSwitch, args: argparse.Namespace) -> None:
    if args.mac_command == "list":
        rows = switch.tables.get_mac_table()
    elif args.mac_command == "port":
        rows = switch.port.get_mac_table_port(args.port)
    elif args.mac_command == "lookup":
        entry = switch.tables.get_mac_address_info(args.address)
        if entry is None:
            print(f"{args.address}: not found")
            return
        rows = [entry]
    else:
        print("Usage: arubaswitch ... mac {list|port|lookup}")
        return
    print(_table(rows, ["mac_address", "port_id", "vlan_id"]))


def cmd_banner(switch: ArubaSwitch, args: argparse.Namespace) -> None:
    if args.banner_command == "set":
        _result(switch.system.set_banner(motd=args.motd, exec_=args.exec_banner), "set banner")
        return
    banner = switch.system.get_banner()
    print("=== MOTD ===")
    print(banner.motd)
    print("=== Exec ===")
    print(banner.exec)


def cmd_led(switch: ArubaSwitch, args: argparse.Namespace) -> None:
    switch.system.blink_led_locator(LEDMode[args.mode.upper()], args.duration)
    print(f"Locator LED {args.mode} for {args.duration} min")


def cmd_ping(switch: ArubaSwitch, args: argparse.Namespace) -> None:
    result = switch.system.ping(args.address, args.timeout)
    print(tabulate(sorted((k, v) for k, v in result.items()), tablefmt="plain"))


def cmd_cli(switch: ArubaSwitch, args: argparse.Namespace) -> None:
    output = switch.system.cli(" ".join(args.command_words))
    if output is None:
        print("CLI command failed", file=sys.stderr)
        sys.exit(2)
    print(output)


def cmd_running_config(switch: ArubaSwitch, args: argparse.Namespace) -> None:
    output = switch.system.get_running_config()
    if output is None:
        print("Could not retrieve running-config", file=sys.stderr)
        sys.exit(2)
    print(output)


COMMANDS = {
    "status": cmd_status,
    "vlan": cmd_vlan,
    "port": cmd_port,
    "poe": cmd_poe,
    "arp": cmd_arp,
    "mac": cmd_mac,
    "banner": cmd_banner,
    "led": cmd_led,
    "ping": cmd_ping,
    "cli": cmd_cli,
    "running-config": cmd_running_config,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for switch management."""
    parser = argparse.ArgumentParser(
        prog="arubaswitch",
        description="ArubaOS-Switch management over the REST API",
    )
    parser.add_argument("--host", required=True, help="Switch hostname or IP address")
    parser.add_argument("--username", default="manager", help="API user (default: manager)")
    parser.add_argument("--password", help="API password (default: $ARUBA_PASSWORD)")
    parser.add_argument("--timeout", type=int, default=5000, help="Request timeout in ms (default: 5000)")
    parser.add_argument("--api-version", default="v7", help="REST API version (default: v7)")
    parser.add_argument("--insecure", action="store_true", help="Do not verify the TLS certificate at all")
    parser.add_argument("--no-verify-host", action="store_true", help="Do not match the certificate to the hostname")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("status", help="Show system status and ports")

    # vlan
    vlan_parser = subparsers.add_parser("vlan", help="VLAN management")
    vlan_sub = vlan_parser.add_subparsers(dest="vlan_command", help="VLAN commands")
    vlan_sub.add_parser("list", help="List all VLANs")
    vlan_create = vlan_sub.add_parser("create", help="Create a VLAN")
    vlan_create.add_argument("vlan_id", type=int, help="VLAN ID (1-4094)")
    vlan_create.add_argument("--name", help="VLAN name")
    vlan_update = vlan_sub.add_parser("update", help="Rename a VLAN")
    vlan_update.add_argument("vlan_id", type=int, help="VLAN ID")
    vlan_update.add_argument("name", help="New VLAN name")
    vlan_delete = vlan_sub.add_parser("delete", help="Delete a VLAN")
    vlan_delete.add_argument("vlan_id", type=int, help="VLAN ID to delete")

    # port
    port_parser = subparsers.add_parser("port", help="Port configuration")
    port_sub = port_parser.add_subparsers(dest="port_command", help="Port commands")
    port_status = port_sub.add_parser("status", help="Port status and VLAN membership")
    port_status.add_argument("port", nargs="?", help="Port id (all ports if omitted)")
    for name, help_text in (("enable", "Enable a port"), ("disable", "Disable a port"), ("restart", "Bounce a port")):
        port_sub.add_parser(name, help=help_text).add_argument("port", help="Port id (e.g. 1/1, A5)")
    port_untag = port_sub.add_parser("untag", help="Set the untagged VLAN of a port")
    port_untag.add_argument("port", help="Port id")
    port_untag.add_argument("vlan_id", type=int, help="VLAN ID")
    port_tag = port_sub.add_parser("tag", help="Set the tagged VLANs of a port")
    port_tag.add_argument("port", help="Port id")
    port_tag.add_argument("vlan_ids", type=int, nargs="*", help="VLAN IDs (none removes all)")

    # poe
    poe_parser = subparsers.add_parser("poe", help="Power over Ethernet")
    poe_sub = poe_parser.add_subparsers(dest="poe_command", help="PoE commands")
    poe_sub.add_parser("status", help="PoE status of all ports")
    for name, help_text in (("enable", "Enable PoE"), ("disable", "Disable PoE"), ("restart", "Power-cycle PoE")):
        poe_sub.add_parser(name, help=help_text).add_argument("port", help="Port id")

    # arp
    arp_parser = subparsers.add_parser("arp", help="ARP table")
    arp_sub = arp_parser.add_subparsers(dest="arp_command", help="ARP commands")
    arp_sub.add_parser("list", help="Full ARP table")
    arp_sub.add_parser("ip", help="Look up an IP address").add_argument("address")
    arp_sub.add_parser("mac", help="Look up a MAC address").add_argument("address")
    arp_sub.add_parser("vlan", help="Entries of one VLAN").add_argument("vlan_id", type=int)

    # mac
    mac_parser = subparsers.add_parser("mac", help="MAC address table")
    mac_sub = mac_parser.add_subparsers(dest="mac_command", help="MAC commands")
    mac_sub.add_parser("list", help="Full MAC table")
    mac_sub.add_parser("port", help="MAC addresses on one port").add_argument("port")
    mac_sub.add_parser("lookup", help="Look up a MAC address").add_argument("address")

    # banner
    banner_parser = subparsers.add_parser("banner", help="Login banners")
    banner_sub = banner_parser.add_subparsers(dest="banner_command", help="Banner commands")
    banner_sub.add_parser("show", help="Show banners")
    banner_set = banner_sub.add_parser("set", help="Replace banners")
    banner_set.add_argument("--motd", help="Message of the day")
    banner_set.add_argument("--exec", dest="exec_banner", help="Exec banner")

    led = subparsers.add_parser("led", help="Locator LED")
    led.add_argument("mode", choices=[m.name.lower() for m in LEDMode])
    led.add_argument("--duration", type=int, default=30, help="Minutes (1-1440, default: 30)")

    ping = subparsers.add_parser("ping", help="Ping from the switch")
    ping.add_argument("address", help="IPv4 or IPv6 address")
    ping.add_argument("--timeout", type=int, default=1, help="Seconds (default: 1)")

    cli = subparsers.add_parser("cli", help="Run a CLI command")
    cli.add_argument("command_words", nargs="+", metavar="word")

    subparsers.add_parser("running-config", help="Show the running configuration")

    return parser


def main(args: list[str] | None = None) -> None:
    """Main entry point for the switch management CLI."""
    parser = build_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(level="DEBUG" if parsed.verbose else "WARNING")

    password = parsed.password if parsed.password is not None else os.environ.get("ARUBA_PASSWORD")
    if password is None:
        print("Error: --password or ARUBA_PASSWORD is required", file=sys.stderr)
        sys.exit(1)

    try:
        config = SwitchConfig(
            parsed.host,
            parsed.username,
            password,
            timeout_ms=parsed.timeout,
            api_version=parsed.api_version,
        )
        config.set_verify_tls_peer(not parsed.insecure).set_verify_tls_host(not parsed.no_verify_host)

        with ArubaSwitch(config) as switch:
            COMMANDS[parsed.command](switch, parsed)
    except (SwitchError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
