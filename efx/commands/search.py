"""Komenda: efx search - wyszukiwanie zdań do poprawy."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich import box

from efx.commands._common import (
    add_epub_argument,
    add_revisions_argument,
    load_document,
    load_revisions,
)

console = Console()


def run(args: argparse.Namespace) -> None:
    doc = load_document(args)
    store = load_revisions(args)

    hits = doc.search(args.term)
    if not hits:
        console.print(f"[yellow]Brak wyników dla:[/yellow] {args.term}")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", expand=False)
    table.add_column("ID", no_wrap=True, style="bold cyan")
    table.add_column("TEKST", no_wrap=False, max_width=90)

    shown = hits[:args.limit] if args.limit else hits
    for unit in shown:
        revised = store.get(unit.id)
        text = Text(revised if revised is not None else unit.text)
        text.highlight_words([args.term], style="bold magenta", case_sensitive=False)
        if revised is not None:
            text.append("  (poprawione)", style="yellow")
        table.add_row(unit.id, text)

    console.print(table)
    console.print(f"  [dim]{len(hits)} wyników[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "search",
        help="Szuka zdań zawierających podany tekst (bez rozróżniania wielkości liter).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Szuka jednostek zawierających podany fragment. Zdania z zapisaną poprawką
pokazywane są w wersji poprawionej.

Przykłady:
  efx search ksiazka.epub "qick"
  efx search ksiazka.epub "qick" --revisions poprawki.json --limit 10
        """,
    )
    add_epub_argument(p)
    p.add_argument("term", metavar="TEKST", help="Szukany fragment.")
    add_revisions_argument(p)
    p.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maksymalna liczba wierszy.",
    )
    p.set_defaults(func=run)
