"""
Fixtures testów EpubFixer: budowanie małych plików EPUB w katalogu tymczasowym.
"""

from __future__ import annotations

import sys
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from markup.segmenter import RegexSegmenter  # noqa: E402


CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""


def xhtml(body: str, title: str = "Rozdział") -> str:
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        "<!DOCTYPE html>\n"
        '<html xmlns="http://www.w3.org/1999/xhtml">\n'
        f"<head><title>{title}</title></head>\n"
        f"<body>\n{body}\n</body>\n"
        "</html>\n"
    )


def opf(items: list[tuple[str, str]], spine: list[str], language: str | None = "en") -> str:
    manifest = "\n".join(
        f'    <item id="{item_id}" href="{href}" media-type="application/xhtml+xml"/>'
        for item_id, href in items
    )
    itemrefs = "\n".join(f'    <itemref idref="{idref}"/>' for idref in spine)
    lang = f"<dc:language>{language}</dc:language>" if language else ""
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>Testowa książka</dc:title>
    {lang}
  </metadata>
  <manifest>
{manifest}
  </manifest>
  <spine>
{itemrefs}
  </spine>
</package>
"""


CH1 = xhtml(
    "<div>\n"
    "<p>The qick fox jumps. It runs <b>awya</b> fast!</p>\n"
    "<p>   </p>\n"
    "</div>\n"
    "<h1>Chapter <span>One</span></h1>"
)
CH2 = xhtml('<p class="x">Second file. Nothing to fix here.</p>')


@pytest.fixture
def segmenter() -> RegexSegmenter:
    return RegexSegmenter()


@pytest.fixture
def make_epub(tmp_path: Path) -> Callable[..., Path]:
    """
    Zwraca fabrykę EPUB.

    chapters: ścieżka względem OEBPS/ -> treść (str albo bytes);
    spine:    kolejność ścieżek (domyślnie kolejność chapters);
    extra:    dodatkowe pozycje spine bez pliku w archiwum.
    """

    def build(
        chapters: dict[str, str | bytes] | None = None,
        spine: list[str] | None = None,
        extra: list[str] | None = None,
        language: str | None = "en",
        name: str = "book.epub",
    ) -> Path:
        chapters = chapters if chapters is not None else {"ch1.xhtml": CH1, "ch2.xhtml": CH2}
        order = spine if spine is not None else list(chapters)
        hrefs = order + (extra or [])
        items = [(f"item{i}", href) for i, href in enumerate(hrefs)]
        ids = {href: item_id for item_id, href in items}

        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
            zf.writestr("META-INF/container.xml", CONTAINER_XML)
            zf.writestr(
                "OEBPS/content.opf",
                opf(items, [ids[h] for h in hrefs], language),
            )
            for href, content in chapters.items():
                zf.writestr(f"OEBPS/{href}", content)
        return path

    return build
