"""
markup/patcher.py - nanoszenie zmiany tekstu bloku bez ruszania tagów.

Architektura:
  tekst bloku + tekst docelowy → diff_match_patch (diff_main + cleanupSemantic)
  → skrypt EQUAL/INSERT/DELETE → odtworzenie na buforach liści tekstowych
  → podmiana tylko zmienionych liści (jednym przejściem)

Tagi i atrybuty nie są odwiedzane; zmieniają się wyłącznie liście tekstowe,
co zachowuje formatowanie (<b>, <i>, <a> ...) wokół poprawki.

Kluczowe funkcje publiczne:
  compute_edit_script(current, target)  -> list[EditOp]
  apply_revision(block_node, target)    -> bool (czy drzewo się zmieniło)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from bs4.element import NavigableString, Tag
from diff_match_patch import diff_match_patch

from markup.blocks import text_leaves

DEFAULT_DIFF_TIMEOUT = 1.0


class Op(IntEnum):
    DELETE = diff_match_patch.DIFF_DELETE
    EQUAL  = diff_match_patch.DIFF_EQUAL
    INSERT = diff_match_patch.DIFF_INSERT


type EditOp = tuple[Op, str]


def compute_edit_script(
    current: str,
    target: str,
    timeout: float = DEFAULT_DIFF_TIMEOUT,
) -> list[EditOp]:
    """
    Skrypt edycji current → target, scalony do semantycznych przebiegów.

    timeout: limit czasu diff_main w sekundach (0 = bez limitu). Po jego
    przekroczeniu skrypt jest mniej zwarty, ale nadal poprawny.
    """
    dmp = diff_match_patch()
    dmp.Diff_Timeout = timeout
    diffs = dmp.diff_main(current, target)
    dmp.diff_cleanupSemantic(diffs)
    return [(Op(op), text) for op, text in diffs if text]


# ---------------------------------------------------------------------------
# Odtwarzanie skryptu na buforach liści
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class _Leaf:
    node: NavigableString
    text: str


class _Cursor:
    """
    Pozycja (liść, offset) nad buforami liści.

    EQUAL, które dojdzie do końca liścia, przesuwa kursor na początek
    następnego; za ostatnim liściem INSERT trafia do nowego liścia końcowego.
    DELETE zostawia kursor w liściu, z którego usunął tekst, więc zamiana
    (DELETE + INSERT) zostaje w tym samym liściu i jego formatowaniu.
    """

    __slots__ = ("leaves", "index", "offset", "trailing")

    def __init__(self, leaves: list[_Leaf]) -> None:
        self.leaves = leaves
        self.index = 0
        self.offset = 0
        self.trailing: list[str] = []

    def _next_leaf(self) -> None:
        self.index += 1
        self.offset = 0

    def _settle(self) -> bool:
        while self.index < len(self.leaves) and self.offset >= len(self.leaves[self.index].text):
            self._next_leaf()
        return self.index < len(self.leaves)

    def skip(self, count: int) -> None:
        while count > 0 and self.index < len(self.leaves):
            available = len(self.leaves[self.index].text) - self.offset
            if available > count:
                self.offset += count
                return
            count -= available
            self._next_leaf()

    def delete(self, count: int) -> None:
        while count > 0 and self._settle():
            leaf = self.leaves[self.index]
            step = min(count, len(leaf.text) - self.offset)
            leaf.text = leaf.text[:self.offset] + leaf.text[self.offset + step:]
            count -= step

    def insert(self, payload: str) -> None:
        if self.index >= len(self.leaves):
            self.trailing.append(payload)
            return
        leaf = self.leaves[self.index]
        leaf.text = leaf.text[:self.offset] + payload + leaf.text[self.offset:]
        self.offset += len(payload)


def replay(leaves: list[_Leaf], script: list[EditOp]) -> str:
    """Odtwarza skrypt na buforach; zwraca tekst dla nowego liścia końcowego."""
    cursor = _Cursor(leaves)
    for op, payload in script:
        if op is Op.EQUAL:
            cursor.skip(len(payload))
        elif op is Op.INSERT:
            cursor.insert(payload)
        else:
            cursor.delete(len(payload))
    return "".join(cursor.trailing)


def apply_revision(
    block_node: Tag,
    target_text: str,
    timeout: float = DEFAULT_DIFF_TIMEOUT,
) -> bool:
    """
    Zmienia tekst bloku na target_text, zostawiając strukturę tagów.

    Zwraca False (bez żadnej zmiany drzewa), gdy tekst już jest docelowy.
    """
    leaves = [_Leaf(node, str(node)) for node in text_leaves(block_node)]
    current = "".join(leaf.text for leaf in leaves)
    if current == target_text:
        return False

    trailing = replay(leaves, compute_edit_script(current, target_text, timeout))

    for leaf in leaves:
        if leaf.text != str(leaf.node):
            leaf.node.replace_with(type(leaf.node)(leaf.text))
    if trailing:
        block_node.append(NavigableString(trailing))
    return True
