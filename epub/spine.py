"""
epub/spine.py - ustalanie kolejności plików treści z pakietu OPF.

Kroki:
  1. META-INF/container.xml → rootfile@full-path (ścieżka OPF)
  2. OPF: manifest (id → href) + spine (kolejność idref)
  3. href względem katalogu OPF, po zdekodowaniu %XX

Publiczne API:
  resolve_spine(archive) -> Spine
"""

from __future__ import annotations

import posixpath
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from urllib.parse import unquote

from data_model.errors import InvalidArchive
from epub.archive import EpubArchive

CONTAINER_PATH = "META-INF/container.xml"

_NS = {
    "c":   "urn:oasis:names:tc:opendocument:xmlns:container",
    "opf": "http://www.idpf.org/2007/opf",
    "dc":  "http://purl.org/dc/elements/1.1/",
}


@dataclass(slots=True)
class Spine:
    opf_path: str
    content_paths: list[str] = field(default_factory=list)   # kolejność czytania
    language: str | None = None                              # dc:language
    title: str | None = None                                 # dc:title


def _parse_xml(archive: EpubArchive, path: str, label: str) -> ET.Element:
    text = archive.read_entry(path)
    if text is None:
        raise InvalidArchive(f"Nieprawidłowy EPUB: brak {label} ({path})")
    try:
        return ET.fromstring(text)
    except ET.ParseError as e:
        raise InvalidArchive(f"Nieprawidłowy EPUB: uszkodzony {label} ({path}): {e}") from e


def find_opf_path(archive: EpubArchive) -> str:
    root = _parse_xml(archive, CONTAINER_PATH, "container.xml")
    for rootfile in root.iterfind(".//c:rootfile", _NS):
        full_path = rootfile.get("full-path")
        if full_path:
            return full_path
    raise InvalidArchive("Nieprawidłowy EPUB: container.xml nie wskazuje pliku OPF")


def _resolve_href(opf_path: str, href: str) -> str:
    base = posixpath.dirname(opf_path)
    path = unquote(href.split("#", 1)[0])
    return posixpath.normpath(posixpath.join(base, path)) if base else posixpath.normpath(path)


def _metadata_text(root: ET.Element, tag: str) -> str | None:
    el = root.find(f"opf:metadata/dc:{tag}", _NS)
    if el is None or not (el.text or "").strip():
        return None
    return el.text.strip()


def resolve_spine(archive: EpubArchive) -> Spine:
    """Czyta container.xml i OPF; zwraca ścieżki plików treści w kolejności spine."""
    opf_path = find_opf_path(archive)
    root = _parse_xml(archive, opf_path, "plik OPF")

    manifest: dict[str, str] = {}
    for item in root.iterfind("opf:manifest/opf:item", _NS):
        item_id, href = item.get("id"), item.get("href")
        if item_id and href:
            manifest[item_id] = href

    content_paths: list[str] = []
    for itemref in root.iterfind("opf:spine/opf:itemref", _NS):
        href = manifest.get(itemref.get("idref", ""))
        if not href:
            continue
        path = _resolve_href(opf_path, href)
        if path not in content_paths:
            content_paths.append(path)

    return Spine(
        opf_path=opf_path,
        content_paths=content_paths,
        language=_metadata_text(root, "language"),
        title=_metadata_text(root, "title"),
    )
