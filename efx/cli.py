"""
efx - narzędzie CLI dla EpubFixer.

Użycie:
  efx <komenda> [opcje]

Komendy:
  units    Listuje jednostki zdaniowe wycięte z plików treści.
  search   Szuka zdań zawierających podany tekst.
  revise   Zapisuje (albo usuwa) poprawkę jednego zdania.
  review   Pokazuje zapisane poprawki obok oryginalnych zdań.
  apply    Nanosi poprawki i zapisuje nowy plik EPUB.
"""

from __future__ import annotations

import argparse
import sys

from efx._log import setup_logging
from efx.commands import apply as cmd_apply
from efx.commands import review as cmd_review
from efx.commands import revise as cmd_revise
from efx.commands import search as cmd_search
from efx.commands import units as cmd_units
from efx.commands._common import load_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="efx",
        description="EpubFixer - poprawianie zdań w EPUB bez naruszania znaczników.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="efx 0.1.0"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Logi diagnostyczne (DEBUG).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_units.add_parser(subparsers)
    cmd_search.add_parser(subparsers)
    cmd_revise.add_parser(subparsers)
    cmd_review.add_parser(subparsers)
    cmd_apply.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    # Windows: terminal może używać cp1252; wymuszamy UTF-8, żeby polskie znaki
    # w tekstach pomocy argparse były wypisywane poprawnie.
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8", errors="replace")

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else load_settings().log_level)
    args.func(args)


if __name__ == "__main__":
    main()
