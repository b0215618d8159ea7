"""Komenda: efx revise - zapisuje (albo usuwa) poprawkę jednego zdania."""

from __future__ import annotations

import argparse

from rich.console import Console

from data_model.errors import StaleRevision
from efx.commands._common import (
    add_epub_argument,
    add_revisions_argument,
    load_document,
    load_revisions,
    revisions_path,
)

console = Console()


def run(args: argparse.Namespace) -> None:
    doc = load_document(args)
    store = load_revisions(args)
    path = revisions_path(args)

    try:
        unit = doc.require_unit(args.unit_id)
    except StaleRevision as e:
        console.print(f"[red]Błąd:[/red] {e}")
        raise SystemExit(1)

    if args.remove:
        if store.discard(unit.id):
            console.print(f"[green]Usunięto poprawkę[/green] [cyan]{unit.id}[/cyan]")
        else:
            console.print(f"[yellow]Brak poprawki dla[/yellow] [cyan]{unit.id}[/cyan]")
        store.save(path)
        return

    if args.text is None:
        console.print("[red]Podaj nowy tekst zdania albo --remove.[/red]")
        raise SystemExit(1)

    new_text = args.text.strip()
    if new_text == unit.text:
        store.discard(unit.id)
        console.print("[yellow]Tekst bez zmian - poprawka nie jest potrzebna.[/yellow]")
    else:
        store.set(unit.id, new_text)
        console.print(f"[cyan]{unit.id}[/cyan]")
        console.print(f"  [red]- {unit.text}[/red]")
        console.print(f"  [green]+ {new_text}[/green]")

    store.save(path)
    console.print(f"[dim]{path}: {len(store)} poprawek[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "revise",
        help="Zapisuje poprawkę zdania do pliku poprawek.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Zapisuje nowy tekst jednostki (id z `efx units` / `efx search`) w pliku
poprawek. Id jest sprawdzane względem wczytanej książki.

Przykłady:
  efx revise ksiazka.epub "OEBPS/ch1.xhtml#3-0" "The quick fox jumps."
  efx revise ksiazka.epub "OEBPS/ch1.xhtml#3-0" --remove
        """,
    )
    add_epub_argument(p)
    p.add_argument("unit_id", metavar="ID", help="Identyfikator jednostki.")
    p.add_argument("text", metavar="TEKST", nargs="?", default=None, help="Nowy tekst zdania.")
    add_revisions_argument(p)
    p.add_argument(
        "--remove",
        action="store_true",
        help="Usuń zapisaną poprawkę tej jednostki.",
    )
    p.set_defaults(func=run)
