"""
revisions - magazyn poprawek użytkownika.

Publiczne API:
  RevisionStore          mapa unit_id -> tekst, zapis/odczyt JSON
  group_by_path(mapping) → dict[content_path, dict[unit_id, tekst]]
"""

from .store import RevisionStore, group_by_path

__all__ = [
    "RevisionStore",
    "group_by_path",
]
