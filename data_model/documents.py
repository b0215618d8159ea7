"""
data_model/documents.py - model jednostek zdaniowych dokumentu EPUB.

SentenceUnit odpowiada jednemu fragmentowi tekstu (zdaniu) wyciętemu z bloku
XHTML; lista jednostek tworzy UnitList. Identyfikator `id` ma postać
"<ścieżka>#<blok>-<zdanie>" i musi być odtwarzalny przez każde kolejne
przejście po tej samej, niezmienionej treści.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UnitId:
    content_path: str     # ścieżka pliku treści w archiwum
    block_index: int      # 0-based, pozycja wśród kandydatów blokowych
    sentence_index: int   # 0-based, pozycja wśród segmentów bloku

    def __str__(self) -> str:
        return f"{self.block_prefix}{self.sentence_index}"

    @property
    def block_prefix(self) -> str:
        return f"{self.content_path}#{self.block_index}-"

    @classmethod
    def parse(cls, raw: str) -> UnitId:
        """
        Odtwarza UnitId z postaci tekstowej.

        Ścieżka może zawierać '#', dlatego dzielimy po ostatnim wystąpieniu.
        Rzuca ValueError dla napisu w innym formacie.
        """
        path, sep, indices = raw.rpartition("#")
        block, dash, sentence = indices.partition("-")
        if not sep or not path or not dash:
            raise ValueError(f"Nieprawidłowy identyfikator jednostki: '{raw}'")
        if not (block.isdigit() and sentence.isdigit()):
            raise ValueError(f"Nieprawidłowy identyfikator jednostki: '{raw}'")
        return cls(path, int(block), int(sentence))


@dataclass(frozen=True, slots=True)
class SentenceUnit:
    key: UnitId
    text: str        # przycięty tekst zdania (wyświetlanie, wyszukiwanie)
    context: str     # wewnętrzny markup bloku; tylko do podglądu

    @property
    def id(self) -> str:
        return str(self.key)

    @property
    def content_path(self) -> str:
        return self.key.content_path


# Jednostki w kolejności dokumentu.
type UnitList = list[SentenceUnit]

# unit_id -> nowy tekst zdania.
type RevisionMap = Mapping[str, str]
