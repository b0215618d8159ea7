"""
data_model/errors.py - wyjątki i ostrzeżenia silnika poprawek.

Wyjątki:
  InvalidArchive       plik nie jest poprawnym EPUB (błąd krytyczny wczytania)
  MissingEntry         brak pliku treści wskazanego w spine
  MalformedMarkup      nie da się sparsować / zdekodować pliku treści
  StaleRevision        poprawka nie pasuje do żadnej jednostki dokumentu
  SegmenterUnavailable żądana strategia segmentacji nie jest dostępna

Issue - niekrytyczny problem zgłaszany wywołującemu (plik pominięty itp.).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class EpubFixError(Exception):
    """Bazowy wyjątek pakietu."""


class InvalidArchive(EpubFixError):
    pass


class SegmenterUnavailable(EpubFixError):
    pass


class _EntryError(EpubFixError):
    def __init__(self, content_path: str, message: str) -> None:
        super().__init__(f"{content_path}: {message}")
        self.content_path = content_path
        self.message = message


class MissingEntry(_EntryError):
    def __init__(self, content_path: str, message: str = "brak pliku w archiwum") -> None:
        super().__init__(content_path, message)


class MalformedMarkup(_EntryError):
    pass


class StaleRevision(EpubFixError):
    def __init__(self, unit_id: str) -> None:
        super().__init__(f"Poprawka nie pasuje do żadnej jednostki: {unit_id}")
        self.unit_id = unit_id


class IssueKind(StrEnum):
    MISSING_ENTRY    = "W_MISSING_ENTRY"
    MALFORMED_MARKUP = "W_MALFORMED_MARKUP"
    STALE_REVISION   = "W_STALE_REVISION"


@dataclass(slots=True)
class Issue:
    """
    Ostrzeżenie zebrane podczas wczytywania albo przebudowy.

    - kind:         klasa problemu (IssueKind)
    - content_path: plik treści, którego dotyczy (albo id poprawki)
    - message:      czytelny opis
    """

    kind: IssueKind
    content_path: str
    message: str

    @classmethod
    def from_error(cls, error: MissingEntry | MalformedMarkup) -> Issue:
        kind = IssueKind.MISSING_ENTRY if isinstance(error, MissingEntry) else IssueKind.MALFORMED_MARKUP
        return cls(kind, error.content_path, error.message)
