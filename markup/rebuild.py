"""
markup/rebuild.py - przebudowa pliku treści z naniesionymi poprawkami.

Architektura:
  original_markup → parse_markup() → iter_blocks() (to samo przejście co
  ekstrakcja) → dla bloku z poprawkami: ponowna segmentacja oryginalnego
  tekstu, podmiana zdań → apply_revision() → serialize_markup()

Publiczne API:
  rebuild_markup(content_path, original_markup, revisions, segmenter) -> str
  splice_block_text(block_text, revised, segmenter)                 -> str
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from data_model.documents import UnitId
from markup.blocks import iter_blocks, parse_markup, serialize_markup
from markup.patcher import DEFAULT_DIFF_TIMEOUT, apply_revision
from markup.segmenter import RegexSegmenter, Segmenter

logger = logging.getLogger(__name__)


def _split_padding(segment: str) -> tuple[str, str]:
    stripped = segment.strip()
    if not stripped:
        return segment, ""
    head = segment[:len(segment) - len(segment.lstrip())]
    tail = segment[len(segment.rstrip()):]
    return head, tail


def splice_block_text(
    block_text: str,
    revised: Mapping[int, str],
    segmenter: Segmenter,
) -> str:
    """
    Składa pełny tekst docelowy bloku.

    revised: sentence_index -> nowy tekst zdania. Białe znaki obcięte z
    segmentu przy ekstrakcji (z przodu i z tyłu) wracają wokół poprawki.
    """
    parts: list[str] = []
    for sentence_index, seg in enumerate(segmenter.segment(block_text)):
        new_text = revised.get(sentence_index)
        if new_text is None:
            parts.append(seg.text)
            continue
        head, tail = _split_padding(seg.text)
        parts.append(head + new_text + tail)
    return "".join(parts)


def _revisions_by_block(
    content_path: str,
    revisions: Mapping[str, str],
) -> dict[int, dict[int, str]]:
    by_block: dict[int, dict[int, str]] = {}
    for raw_id, text in revisions.items():
        try:
            key = UnitId.parse(raw_id)
        except ValueError:
            logger.debug("Pominięto poprawkę z nieprawidłowym id: %s", raw_id)
            continue
        if key.content_path != content_path:
            continue
        by_block.setdefault(key.block_index, {})[key.sentence_index] = text
    return by_block


def rebuild_markup(
    content_path: str,
    original_markup: str,
    revisions: Mapping[str, str],
    segmenter: Segmenter | None = None,
    diff_timeout: float = DEFAULT_DIFF_TIMEOUT,
) -> str:
    """
    Zwraca markup pliku z naniesionymi poprawkami.

    Args:
        content_path:    Ścieżka pliku w archiwum.
        original_markup: Oryginalna, niezmieniona treść pliku.
        revisions:       unit_id -> nowy tekst; klucze innych plików są pomijane.
        segmenter:       Ta sama strategia, której użyła ekstrakcja.
    """
    segmenter = segmenter or RegexSegmenter()
    by_block = _revisions_by_block(content_path, revisions)
    tree = parse_markup(original_markup, content_path)

    patched = 0
    for block in iter_blocks(tree):
        revised = by_block.get(block.index)
        if not revised:
            continue
        target = splice_block_text(block.text, revised, segmenter)
        if apply_revision(block.node, target, diff_timeout):
            patched += 1
            logger.debug("%s: poprawiono blok %d", content_path, block.index)

    logger.debug("%s: %d bloków zmienionych", content_path, patched)
    return serialize_markup(tree)
