"""
markup - silnik wycinania i nanoszenia poprawek w XHTML.

Publiczne API:
  extract_units(markup_text, content_path, segmenter)     → UnitList
  rebuild_markup(content_path, markup, revisions, seg)    → str
  apply_revision(block_node, target_text)                 → bool
  compute_edit_script(current, target)                    → list[EditOp]
  get_segmenter(strategy, locale)                         → Segmenter
  iter_blocks(tree), parse_markup(text), serialize_markup(tree)
"""

from .blocks    import Block, iter_blocks, parse_markup, serialize_markup, flatten_text
from .extractor import extract_units, extract_from_tree
from .patcher   import Op, apply_revision, compute_edit_script
from .rebuild   import rebuild_markup, splice_block_text
from .segmenter import (
    Segment,
    Segmenter,
    RegexSegmenter,
    IcuSegmenter,
    get_segmenter,
)

__all__ = [
    "Block",
    "iter_blocks",
    "parse_markup",
    "serialize_markup",
    "flatten_text",
    "extract_units",
    "extract_from_tree",
    "Op",
    "apply_revision",
    "compute_edit_script",
    "rebuild_markup",
    "splice_block_text",
    "Segment",
    "Segmenter",
    "RegexSegmenter",
    "IcuSegmenter",
    "get_segmenter",
]
