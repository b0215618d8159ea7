"""
epub/document.py - wczytany dokument EPUB i przebudowa z poprawkami.

Architektura:
  EPUB → EpubArchive.open() → resolve_spine() → dla każdego pliku treści:
  read_entry() → extract_units() → EpubDocument.units

  EpubDocument.save(dest, revisions):
  group_by_path() → rebuild_markup() per plik (opcjonalnie w puli wątków)
  → write_entry() do KOPII archiwum → EpubArchive.save()

Brakujący plik treści albo niepoprawny markup nie przerywa pracy: plik jest
pomijany i trafia do listy issues. Wczytane archiwum nigdy nie jest
modyfikowane, więc przebudowę można powtórzyć z tą samą mapą poprawek.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from data_model.documents import SentenceUnit, UnitList
from data_model.errors import Issue, IssueKind, MalformedMarkup, MissingEntry, StaleRevision
from epub.archive import EpubArchive
from epub.spine import Spine, resolve_spine
from markup.extractor import extract_units
from markup.patcher import DEFAULT_DIFF_TIMEOUT
from markup.rebuild import rebuild_markup
from markup.segmenter import Segmenter, get_segmenter
from revisions.store import group_by_path

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "ko"


@dataclass(slots=True)
class RebuildResult:
    archive: EpubArchive                                   # kopia z poprawkami
    changed_paths: list[str] = field(default_factory=list)
    applied: list[str] = field(default_factory=list)       # id użytych poprawek
    stale: list[str] = field(default_factory=list)         # id bez jednostki
    issues: list[Issue] = field(default_factory=list)


class EpubDocument:
    def __init__(
        self,
        archive: EpubArchive,
        spine: Spine,
        units: UnitList,
        segmenter: Segmenter,
        issues: list[Issue] | None = None,
        source_name: str = "",
    ) -> None:
        self.archive = archive
        self.spine = spine
        self.units = units
        self.segmenter = segmenter
        self.issues = issues or []
        self.source_name = source_name or archive.name
        self._by_id: dict[str, SentenceUnit] = {u.id: u for u in units}

    # -----------------------------------------------------------------------
    # Wczytywanie
    # -----------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        path: str | Path,
        segmenter: Segmenter | None = None,
        strategy: str = "auto",
        default_locale: str = DEFAULT_LOCALE,
    ) -> EpubDocument:
        """
        Otwiera EPUB i wycina jednostki ze wszystkich plików spine.

        Rzuca InvalidArchive, gdy plik nie jest poprawnym EPUB (brak
        częściowego dokumentu). Segmenter, jeśli nie podany, dobierany jest
        do dc:language książki.
        """
        archive = EpubArchive.open(path)
        spine = resolve_spine(archive)
        if segmenter is None:
            segmenter = get_segmenter(strategy, spine.language or default_locale)

        units: UnitList = []
        issues: list[Issue] = []
        for content_path in spine.content_paths:
            try:
                markup_text = archive.read_entry(content_path)
                if markup_text is None:
                    raise MissingEntry(content_path)
                units.extend(extract_units(markup_text, content_path, segmenter))
            except (MissingEntry, MalformedMarkup) as e:
                logger.warning("Pominięto plik treści: %s", e)
                issues.append(Issue.from_error(e))

        logger.info(
            "%s: %d jednostek z %d plików (segmenter=%s)",
            archive.name, len(units), len(spine.content_paths), segmenter.name,
        )
        return cls(archive, spine, units, segmenter, issues)

    # -----------------------------------------------------------------------
    # Zapytania
    # -----------------------------------------------------------------------

    def unit(self, unit_id: str) -> SentenceUnit | None:
        return self._by_id.get(unit_id)

    def require_unit(self, unit_id: str) -> SentenceUnit:
        """Jak unit(), ale brak jednostki zgłasza jako StaleRevision."""
        unit = self._by_id.get(unit_id)
        if unit is None:
            raise StaleRevision(unit_id)
        return unit

    def __contains__(self, unit_id: object) -> bool:
        return unit_id in self._by_id

    def units_for(self, content_path: str) -> UnitList:
        return [u for u in self.units if u.content_path == content_path]

    def search(self, term: str) -> UnitList:
        """Jednostki zawierające term (bez rozróżniania wielkości liter)."""
        if not term:
            return []
        needle = term.casefold()
        return [u for u in self.units if needle in u.text.casefold()]

    @property
    def default_output_name(self) -> str:
        return f"fixed_{self.source_name}"

    # -----------------------------------------------------------------------
    # Przebudowa
    # -----------------------------------------------------------------------

    def _rebuild_one(
        self,
        content_path: str,
        revisions: Mapping[str, str],
        diff_timeout: float,
    ) -> str:
        original = self.archive.read_entry(content_path)
        if original is None:
            raise MissingEntry(content_path)
        return rebuild_markup(content_path, original, revisions, self.segmenter, diff_timeout)

    def rebuild(
        self,
        revisions: Mapping[str, str],
        workers: int = 1,
        diff_timeout: float = DEFAULT_DIFF_TIMEOUT,
    ) -> RebuildResult:
        """
        Nanosi poprawki na kopię archiwum.

        Poprawki bez jednostki w tym dokumencie są cicho pomijane (stale).
        Pliki przetwarzane są niezależnie; wpisy trafiają do kopii archiwum
        dopiero, gdy wszystkie pliki zostały przebudowane.
        """
        stale = [k for k in revisions if k not in self._by_id]
        for unit_id in stale:
            logger.debug("Pominięto nieaktualną poprawkę: %s", unit_id)
        live = {k: v for k, v in revisions.items() if k in self._by_id}

        result = RebuildResult(archive=self.archive.copy(), stale=stale)
        result.issues.extend(Issue(IssueKind.STALE_REVISION, k, "brak jednostki") for k in stale)

        grouped = group_by_path(live)
        # kolejność spine, nie kolejność wpisów w mapie
        paths = [p for p in self.spine.content_paths if p in grouped]

        def task(content_path: str) -> str | Issue:
            try:
                return self._rebuild_one(content_path, grouped[content_path], diff_timeout)
            except (MissingEntry, MalformedMarkup) as e:
                logger.warning("Pominięto przebudowę pliku: %s", e)
                return Issue.from_error(e)

        if workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                outcomes = list(pool.map(task, paths))
        else:
            outcomes = [task(p) for p in paths]

        for content_path, outcome in zip(paths, outcomes):
            if isinstance(outcome, Issue):
                result.issues.append(outcome)
                continue
            result.archive.write_entry(content_path, outcome)
            result.changed_paths.append(content_path)
            result.applied.extend(grouped[content_path])

        return result

    def save(
        self,
        dest: str | Path,
        revisions: Mapping[str, str],
        workers: int = 1,
        diff_timeout: float = DEFAULT_DIFF_TIMEOUT,
    ) -> RebuildResult:
        result = self.rebuild(revisions, workers=workers, diff_timeout=diff_timeout)
        result.archive.save(dest)
        logger.info(
            "Zapisano %s: %d plików, %d poprawek",
            dest, len(result.changed_paths), len(result.applied),
        )
        return result
