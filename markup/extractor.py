"""
markup/extractor.py - wycinanie jednostek zdaniowych z pliku XHTML.

Architektura:
  markup_text → parse_markup() → iter_blocks() → segmenter.segment(tekst bloku)
  → SentenceUnit dla każdego niepustego segmentu

Kluczowe funkcje publiczne:
  extract_units(markup_text, content_path, segmenter) -> UnitList
"""

from __future__ import annotations

from bs4.element import Tag

from data_model.documents import SentenceUnit, UnitId, UnitList
from markup.blocks import iter_blocks, parse_markup
from markup.segmenter import RegexSegmenter, Segmenter


def extract_units(
    markup_text: str,
    content_path: str,
    segmenter: Segmenter | None = None,
) -> UnitList:
    """
    Parsuje plik treści i zwraca jego jednostki w kolejności dokumentu.

    Args:
        markup_text:  Treść pliku XHTML.
        content_path: Ścieżka pliku w archiwum (część identyfikatora).
        segmenter:    Strategia podziału na zdania; ta sama musi zostać
                      użyta przy przebudowie.
    """
    tree = parse_markup(markup_text, content_path)
    return extract_from_tree(tree, content_path, segmenter)


def extract_from_tree(
    tree: Tag,
    content_path: str,
    segmenter: Segmenter | None = None,
) -> UnitList:
    segmenter = segmenter or RegexSegmenter()
    units: UnitList = []

    for block in iter_blocks(tree):
        context = block.node.decode_contents()
        # Indeks zdania liczy także segmenty z samych białych znaków
        for sentence_index, seg in enumerate(segmenter.segment(block.text)):
            text = seg.text.strip()
            if not text:
                continue
            units.append(SentenceUnit(
                key=UnitId(content_path, block.index, sentence_index),
                text=text,
                context=context,
            ))

    return units
