"""Entry point for ``python -m arubaswitch``: print a startup banner, then run the CLI."""

from __future__ import annotations

import os
import sys

from tabulate import tabulate

from arubaswitch import __version__, configure_logging, glogger


def _print_startup_banner() -> None:
    startup_rows = [
        ["version", __version__],
        ["python", sys.version.split()[0]],
    ]

    for var in ("GITHUB_REF", "GITHUB_SHA", "BUILDTIME"):
        val = os.environ.get(var)
        if val and not val.endswith("_is_undefined"):
            startup_rows.append([var, val])

    table_str = tabulate(startup_rows, tablefmt="mixed_grid")
    lines = table_str.split("\n")
    table_width = len(lines[0])
    title = "arubaswitch starting up"
    title_border = "┍" + "━" * (table_width - 2) + "┑"
    title_row = "│ " + title.center(table_width - 4) + " │"
    separator = lines[0].replace("┍", "┝").replace("┑", "┥").replace("┯", "┿")

    glogger.opt(raw=True).info(
        "\n{}\n", title_border + "\n" + title_row + "\n" + separator + "\n" + "\n".join(lines[1:])
    )


def main() -> None:
    from arubaswitch.cli import main as cli_main

    configure_logging()
    _print_startup_banner()
    cli_main(sys.argv[1:])


if __name__ == "__main__":
    main()
