"""Komenda: efx review - zestawienie oryginał / poprawka przed zapisem."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table
from rich import box

from efx.commands._common import (
    add_epub_argument,
    add_revisions_argument,
    load_document,
    load_revisions,
)

console = Console()

_MISSING_ORIGINAL = "(nie znaleziono oryginału)"


def run(args: argparse.Namespace) -> None:
    doc = load_document(args)
    store = load_revisions(args)

    if not len(store):
        console.print("[yellow]Brak poprawek.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("ID",        no_wrap=True, style="bold cyan")
    table.add_column("ORYGINAŁ",  no_wrap=False, max_width=50, style="red")
    table.add_column("POPRAWKA",  no_wrap=False, max_width=50, style="green")

    stale = 0
    for unit_id, new_text in store.items():
        unit = doc.unit(unit_id)
        if unit is None:
            stale += 1
        table.add_row(unit_id, unit.text if unit else _MISSING_ORIGINAL, new_text)

    console.print(table)
    console.print(f"  [dim]{len(store)} poprawek[/dim]")
    if stale:
        console.print(
            f"  [yellow]{stale} poprawek nie pasuje do książki - zostaną pominięte.[/yellow]"
        )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "review",
        help="Pokazuje zapisane poprawki obok oryginalnych zdań.",
    )
    add_epub_argument(p)
    add_revisions_argument(p)
    p.set_defaults(func=run)
