"""
markup/segmenter.py - podział tekstu bloku na zdania.

Strategie:
  IcuSegmenter   - BreakIterator zdań z ICU (PyICU), zależny od języka
  RegexSegmenter - heurystyka: tekst do . ! ? + końcowe białe znaki

Gwarancja obu strategii: segmenty sklejone w kolejności dają dokładnie
tekst wejściowy (bez luk i nakładania się). Pusty tekst = zero segmentów.

Publiczne API:
  get_segmenter(strategy, locale) -> Segmenter
"""

from __future__ import annotations

import importlib.util
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Protocol

from data_model.errors import SegmenterUnavailable

# Zdanie zakończone interpunkcją (z białymi znakami po niej) albo reszta bez
# interpunkcji końcowej. Każda pozycja tekstu pasuje do jednej z gałęzi.
_SENTENCE_RE = re.compile(r"[^.!?]*[.!?]+\s*|[^.!?]+")

STRATEGIES = ("auto", "icu", "regex")


@dataclass(frozen=True, slots=True)
class Segment:
    text: str
    start: int   # offset w tekście bloku

    @property
    def end(self) -> int:
        return self.start + len(self.text)


class Segmentation:
    """Leniwa sekwencja segmentów; każde iterowanie dzieli tekst od nowa."""

    __slots__ = ("text", "_split")

    def __init__(self, text: str, split: Callable[[str], Iterator[Segment]]) -> None:
        self.text = text
        self._split = split

    def __iter__(self) -> Iterator[Segment]:
        return self._split(self.text)


class Segmenter(Protocol):
    name: str

    def segment(self, text: str) -> Segmentation: ...


class RegexSegmenter:
    name = "regex"

    def segment(self, text: str) -> Segmentation:
        return Segmentation(text, self._split)

    @staticmethod
    def _split(text: str) -> Iterator[Segment]:
        for m in _SENTENCE_RE.finditer(text):
            yield Segment(m.group(), m.start())


class IcuSegmenter:
    """
    Granice zdań z ICU BreakIterator dla podanego języka.

    ICU liczy pozycje w jednostkach UTF-16, więc kawałki wycinamy z
    UnicodeString i dopiero potem przeliczamy offsety na znaki Pythona.
    """

    name = "icu"

    def __init__(self, locale: str) -> None:
        import icu

        self._icu = icu
        self.locale = locale

    def segment(self, text: str) -> Segmentation:
        return Segmentation(text, self._split)

    def _split(self, text: str) -> Iterator[Segment]:
        if not text:
            return
        icu = self._icu
        ustr = icu.UnicodeString(text)
        breaker = icu.BreakIterator.createSentenceInstance(icu.Locale(self.locale))
        breaker.setText(ustr)
        prev = breaker.first()
        offset = 0
        for boundary in breaker:
            piece = str(ustr[prev:boundary])
            yield Segment(piece, offset)
            offset += len(piece)
            prev = boundary


def icu_available() -> bool:
    return importlib.util.find_spec("icu") is not None


def get_segmenter(strategy: str = "auto", locale: str = "ko") -> Segmenter:
    """
    Zwraca segmenter dla strategii "auto" | "icu" | "regex".

    "auto" wybiera ICU, gdy PyICU jest zainstalowane, w przeciwnym razie
    heurystykę regex.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Nieznana strategia segmentacji: '{strategy}'")
    if strategy == "regex":
        return RegexSegmenter()
    if icu_available():
        return IcuSegmenter(locale)
    if strategy == "icu":
        raise SegmenterUnavailable(
            "Strategia 'icu' wymaga pakietu PyICU. Zainstaluj: pip install 'epub-fixer[icu]'"
        )
    return RegexSegmenter()
