"""Komenda: efx units - lista jednostek zdaniowych książki."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich import box

from data_model.documents import UnitList
from efx.commands._common import (
    add_epub_argument,
    add_revisions_argument,
    load_document,
    load_revisions,
)

console = Console()


# ---------------------------------------------------------------------------
# Zapis do JSON
# ---------------------------------------------------------------------------

def _write_json(units: UnitList, json_path: Path) -> None:
    data = [
        {
            "id": u.id,
            "content_path": u.content_path,
            "block_index": u.key.block_index,
            "sentence_index": u.key.sentence_index,
            "text": u.text,
            "context": u.context,
        }
        for u in units
    ]
    json_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    console.print(f"[green]JSON:[/green] {json_path}  ({len(units)} jednostek)")


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def show_units(units: UnitList, revised: dict[str, str] | None = None) -> None:
    if not units:
        console.print("[yellow]Brak jednostek.[/yellow]")
        return

    revised = revised or {}
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("ID",    no_wrap=True, style="bold cyan")
    table.add_column("",      no_wrap=True, style="yellow")
    table.add_column("TEKST", no_wrap=False, max_width=80)

    for unit in units:
        new_text = revised.get(unit.id)
        table.add_row(
            unit.id,
            "*" if new_text is not None else "",
            new_text if new_text is not None else unit.text,
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(units)} jednostek[/dim]\n")


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    doc = load_document(args)

    units = doc.units_for(args.path) if args.path else doc.units
    if args.limit:
        units = units[:args.limit]

    if args.json:
        _write_json(units, Path(args.json))
    else:
        show_units(units, load_revisions(args).as_dict())


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "units",
        help="Listuje jednostki zdaniowe wycięte z plików treści.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje EPUB i listuje jednostki zdaniowe w kolejności spine.

Przykłady:
  efx units ksiazka.epub
  efx units ksiazka.epub --path OEBPS/ch1.xhtml --limit 20
  efx units ksiazka.epub --json jednostki.json

W tabeli zdania z zapisaną poprawką (plik poprawek) oznaczone są "*"
i pokazane w wersji poprawionej.
        """,
    )
    add_epub_argument(p)
    add_revisions_argument(p)
    p.add_argument(
        "--path",
        metavar="ŚCIEŻKA",
        default=None,
        help="Tylko jednostki z podanego pliku treści.",
    )
    p.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maksymalna liczba wierszy.",
    )
    p.add_argument(
        "--json",
        metavar="PLIK.json",
        default=None,
        help="Zapisz jednostki do pliku JSON zamiast tabeli.",
    )
    p.set_defaults(func=run)
