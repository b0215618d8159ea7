"""Komenda: efx apply - zapisuje poprawiony EPUB."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console

from efx.commands._common import (
    add_epub_argument,
    add_revisions_argument,
    load_document,
    load_revisions,
    load_settings,
    show_issues,
)

console = Console()


def run(args: argparse.Namespace) -> None:
    settings = load_settings()
    doc = load_document(args)
    store = load_revisions(args)

    if not len(store):
        console.print("[yellow]Brak poprawek - nic do zapisania.[/yellow]")
        return

    out = Path(args.out) if args.out else Path(args.epub_file).with_name(doc.default_output_name)
    workers = args.workers or settings.workers

    console.print(
        f"Nanoszenie [bold]{len(store)}[/bold] poprawek na [bold]{doc.source_name}[/bold] …"
    )
    try:
        result = doc.save(out, store.as_dict(), workers=workers, diff_timeout=settings.diff_timeout)
    except OSError as e:
        console.print(f"[red]Błąd zapisu:[/red] {e}")
        raise SystemExit(1)

    show_issues(result.issues)
    console.print(
        f"[green]EPUB:[/green] {out}  "
        f"({len(result.applied)} poprawek w {len(result.changed_paths)} plikach)"
    )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "apply",
        help="Nanosi poprawki i zapisuje nowy plik EPUB.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Nanosi poprawki z pliku poprawek na pliki treści, zachowując tagi i
atrybuty, i zapisuje nowy EPUB (domyślnie fixed_<nazwa>.epub obok źródła).

Przykłady:
  efx apply ksiazka.epub
  efx apply ksiazka.epub --revisions poprawki.json -o poprawiona.epub
  efx apply ksiazka.epub --workers 4
        """,
    )
    add_epub_argument(p)
    add_revisions_argument(p)
    p.add_argument(
        "-o", "--out",
        metavar="PLIK.epub",
        default=None,
        help="Plik wynikowy (domyślnie: fixed_<nazwa>.epub).",
    )
    p.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Liczba wątków przebudowy (domyślnie: EFX_WORKERS lub 1).",
    )
    p.set_defaults(func=run)
