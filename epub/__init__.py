"""
epub - archiwum EPUB, spine i wczytany dokument.

Publiczne API:
  EpubDocument.load(path, ...)          → EpubDocument
  document.save(dest, revisions)        → RebuildResult
  EpubArchive.open(path)                → EpubArchive
  resolve_spine(archive)                → Spine
"""

from .archive  import EpubArchive
from .spine    import Spine, resolve_spine
from .document import EpubDocument, RebuildResult

__all__ = [
    "EpubArchive",
    "Spine",
    "resolve_spine",
    "EpubDocument",
    "RebuildResult",
]
