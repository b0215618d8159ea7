"""
data_model - struktury danych EpubFixer.

Użycie:
  from data_model import SentenceUnit, UnitId, MalformedMarkup, ...

Moduły:
  documents - UnitId, SentenceUnit, UnitList, RevisionMap
  errors    - EpubFixError i pochodne, IssueKind, Issue
"""

from .documents import (
    UnitId,
    SentenceUnit,
    UnitList,
    RevisionMap,
)
from .errors import (
    EpubFixError,
    InvalidArchive,
    MissingEntry,
    MalformedMarkup,
    StaleRevision,
    SegmenterUnavailable,
    IssueKind,
    Issue,
)

__all__ = [
    # documents
    "UnitId",
    "SentenceUnit",
    "UnitList",
    "RevisionMap",
    # errors
    "EpubFixError",
    "InvalidArchive",
    "MissingEntry",
    "MalformedMarkup",
    "StaleRevision",
    "SegmenterUnavailable",
    "IssueKind",
    "Issue",
]
