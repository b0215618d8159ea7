"""
epub/archive.py - odczyt i zapis wpisów archiwum EPUB (ZIP).

Całe archiwum trafia do pamięci przy otwarciu; zapis tworzy nowy plik ZIP
z wpisami w oryginalnej kolejności. Wpis "mimetype" idzie pierwszy i bez
kompresji, jak wymaga OCF.

Publiczne API:
  EpubArchive.open(path)      -> EpubArchive   (InvalidArchive przy błędzie)
  archive.read_entry(path)    -> str | None
  archive.write_entry(path, text)
  archive.copy()              -> EpubArchive
  archive.save(dest)
"""

from __future__ import annotations

import zipfile
from pathlib import Path

from data_model.errors import InvalidArchive, MalformedMarkup

MIMETYPE_ENTRY = "mimetype"
COMPRESS_LEVEL = 6


class EpubArchive:
    def __init__(self, entries: dict[str, bytes], name: str = "") -> None:
        self._entries = entries
        self.name = name

    @classmethod
    def open(cls, path: str | Path) -> EpubArchive:
        path = Path(path)
        try:
            with zipfile.ZipFile(path) as zf:
                entries = {
                    info.filename: zf.read(info)
                    for info in zf.infolist()
                    if not info.is_dir()
                }
        except FileNotFoundError as e:
            raise InvalidArchive(f"Plik nie istnieje: {path}") from e
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise InvalidArchive(f"Nieprawidłowy EPUB (nie jest archiwum ZIP): {path}") from e
        return cls(entries, name=path.name)

    # -- odczyt --------------------------------------------------------------

    def names(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def read_bytes(self, path: str) -> bytes | None:
        return self._entries.get(path)

    def read_entry(self, path: str) -> str | None:
        """Treść wpisu jako tekst UTF-8; None gdy wpisu nie ma."""
        raw = self._entries.get(path)
        if raw is None:
            return None
        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedMarkup(path, f"nie da się zdekodować jako UTF-8: {e}") from e

    # -- zapis ---------------------------------------------------------------

    def write_entry(self, path: str, content: str) -> None:
        self._entries[path] = content.encode("utf-8")

    def copy(self) -> EpubArchive:
        return EpubArchive(dict(self._entries), name=self.name)

    def save(self, dest: str | Path) -> Path:
        dest = Path(dest)
        names = self.names()
        if MIMETYPE_ENTRY in self._entries:
            names.remove(MIMETYPE_ENTRY)
            names.insert(0, MIMETYPE_ENTRY)

        with zipfile.ZipFile(dest, "w") as zf:
            for name in names:
                if name == MIMETYPE_ENTRY:
                    zf.writestr(name, self._entries[name], compress_type=zipfile.ZIP_STORED)
                else:
                    zf.writestr(
                        name,
                        self._entries[name],
                        compress_type=zipfile.ZIP_DEFLATED,
                        compresslevel=COMPRESS_LEVEL,
                    )
        return dest
