"""
revisions/store.py - poprawki użytkownika: unit_id -> nowy tekst zdania.

Magazyn żyje tylko dla jednego wczytanego dokumentu; klucze muszą pochodzić
z ekstraktora tego dokumentu. CLI trzyma go w pliku JSON między wywołaniami.

Format pliku::

    {
        "OEBPS/ch1.xhtml#3-0": "Poprawione zdanie.",
        "OEBPS/ch2.xhtml#0-2": "Inne zdanie."
    }
"""

from __future__ import annotations

import json
from collections.abc import ItemsView, Iterable, Iterator, Mapping
from pathlib import Path

from data_model.documents import UnitId


def group_by_path(revisions: Mapping[str, str]) -> dict[str, dict[str, str]]:
    """content_path -> {unit_id: tekst}; klucze w złym formacie są pomijane."""
    grouped: dict[str, dict[str, str]] = {}
    for unit_id, text in revisions.items():
        try:
            key = UnitId.parse(unit_id)
        except ValueError:
            continue
        grouped.setdefault(key.content_path, {})[unit_id] = text
    return grouped


class RevisionStore:
    def __init__(self, revisions: Mapping[str, str] | None = None) -> None:
        self._revisions: dict[str, str] = dict(revisions or {})

    # -- mapping -------------------------------------------------------------

    def set(self, unit_id: str, text: str) -> None:
        self._revisions[unit_id] = text

    def get(self, unit_id: str, default: str | None = None) -> str | None:
        return self._revisions.get(unit_id, default)

    def discard(self, unit_id: str) -> bool:
        return self._revisions.pop(unit_id, None) is not None

    def __contains__(self, unit_id: object) -> bool:
        return unit_id in self._revisions

    def __len__(self) -> int:
        return len(self._revisions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._revisions)

    def items(self) -> ItemsView[str, str]:
        return self._revisions.items()

    def as_dict(self) -> dict[str, str]:
        return dict(self._revisions)

    def prune(self, valid_ids: Iterable[str]) -> list[str]:
        """Usuwa poprawki spoza valid_ids; zwraca usunięte klucze."""
        valid = set(valid_ids)
        stale = [k for k in self._revisions if k not in valid]
        for k in stale:
            del self._revisions[k]
        return stale

    # -- plik JSON -----------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path) -> RevisionStore:
        path = Path(path)
        if not path.exists():
            return cls()
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"Plik poprawek musi zawierać obiekt JSON: {path}")
        bad = [k for k, v in raw.items() if not isinstance(v, str)]
        if bad:
            raise ValueError(f"Poprawka musi być tekstem ({path}): {', '.join(bad)}")
        return cls(raw)

    def save(self, path: str | Path) -> None:
        Path(path).write_text(
            json.dumps(self._revisions, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
