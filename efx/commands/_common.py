"""Wspólne kroki komend: wczytanie EPUB, pliku poprawek, wypisanie ostrzeżeń."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from rich.console import Console

from data_model.errors import EpubFixError, Issue
from efx._config import Settings, get_settings
from epub.document import EpubDocument
from revisions.store import RevisionStore

console = Console()


def default_revisions_path(epub_path: Path) -> Path:
    return epub_path.with_suffix(".revisions.json")


def revisions_path(args: argparse.Namespace) -> Path:
    if getattr(args, "revisions", None):
        return Path(args.revisions)
    return default_revisions_path(Path(args.epub_file))


def show_issues(issues: list[Issue]) -> None:
    for issue in issues:
        console.print(f"[yellow]{issue.kind}[/yellow] {issue.content_path}: {issue.message}")


def load_settings() -> Settings:
    try:
        return get_settings()
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)


def load_document(args: argparse.Namespace) -> EpubDocument:
    epub_path = Path(args.epub_file)
    if not epub_path.exists():
        console.print(f"[red]Plik nie istnieje:[/red] {epub_path}")
        raise SystemExit(1)

    settings = load_settings()
    try:
        doc = EpubDocument.load(
            epub_path,
            strategy=settings.segmenter,
            default_locale=settings.locale,
        )
    except (EpubFixError, ValueError) as e:
        console.print(f"[red]Błąd wczytywania EPUB:[/red] {e}")
        raise SystemExit(1)

    show_issues(doc.issues)
    return doc


def load_revisions(args: argparse.Namespace) -> RevisionStore:
    path = revisions_path(args)
    try:
        return RevisionStore.load(path)
    except (ValueError, json.JSONDecodeError) as e:
        console.print(f"[red]Błąd pliku poprawek:[/red] {e}")
        raise SystemExit(1)


def add_epub_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "epub_file",
        metavar="PLIK.epub",
        help="Ścieżka do pliku EPUB.",
    )


def add_revisions_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--revisions",
        metavar="PLIK.json",
        default=None,
        help="Plik poprawek (domyślnie: <PLIK>.revisions.json obok EPUB).",
    )
