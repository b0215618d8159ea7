"""
markup/blocks.py - parsowanie XHTML i wspólne przejście po blokach treści.

To samo przejście (iter_blocks) wykonują ekstraktor jednostek i przebudowa
pliku; numeracja bloków musi być w obu identyczna, inaczej poprawki trafią
w złe miejsce.

Reguły przejścia:
  - kandydaci: tagi z CANDIDATE_TAGS w kolejności dokumentu (depth-first)
  - block_index = pozycja wśród WSZYSTKICH kandydatów, także pominiętych
  - pomijamy węzły już skonsumowane, z samymi białymi znakami oraz takie,
    których bezpośrednie dziecko jest tagiem z NESTED_BLOCK_TAGS
  - zaakceptowany blok i wszyscy jego potomkowie są konsumowani
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import CData, NavigableString, PreformattedString, Tag

from data_model.errors import MalformedMarkup

_HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

# Tagi, z których wycinamy jednostki
CANDIDATE_TAGS: tuple[str, ...] = ("p", *_HEADING_TAGS, "li", "div", "span")

# Dziecko z tym tagiem oznacza kontener: schodzimy głębiej
NESTED_BLOCK_TAGS: frozenset[str] = frozenset({
    "p", "div", "li", "ul", "ol", "table", "blockquote",
    "section", "article", "aside", "nav", "header", "footer",
    *_HEADING_TAGS,
})

XHTML_FEATURES = "lxml-xml"
HTML_FEATURES = "html.parser"


@dataclass(slots=True)
class Block:
    index: int    # block_index
    node: Tag
    text: str     # spłaszczony tekst w chwili wizyty


def looks_like_xml(markup_text: str) -> bool:
    """Deklaracja <?xml ...?> albo <html xmlns=...> na początku pliku."""
    head = markup_text.lstrip()[:1024].lower()
    return head.startswith("<?xml") or ("<html" in head and "xmlns" in head)


def parse_markup(markup_text: str, content_path: str = "<markup>") -> BeautifulSoup:
    """
    Parsuje plik treści; odrzucony markup zgłasza jako MalformedMarkup.

    XHTML idzie przez parser XML (lxml), który zachowuje wielkość liter
    w nazwach tagów i atrybutów (SVG viewBox, MathML). Fragmenty bez
    deklaracji XML parsuje html.parser.
    """
    features = XHTML_FEATURES if looks_like_xml(markup_text) else HTML_FEATURES
    try:
        return BeautifulSoup(markup_text, features)
    except ParserRejectedMarkup as e:
        raise MalformedMarkup(content_path, f"parser odrzucił markup: {e}") from e


def serialize_markup(tree: Tag) -> str:
    return tree.decode(formatter="minimal")


def is_text_leaf(node: object) -> bool:
    """Liść tekstowy: zwykły tekst albo CDATA (bez komentarzy, doctype, PI)."""
    if not isinstance(node, NavigableString):
        return False
    return not isinstance(node, PreformattedString) or isinstance(node, CData)


def text_leaves(node: Tag) -> list[NavigableString]:
    return [d for d in node.descendants if is_text_leaf(d)]


def flatten_text(node: Tag) -> str:
    return "".join(text_leaves(node))


def has_block_child(node: Tag) -> bool:
    return any(
        isinstance(c, Tag) and c.name in NESTED_BLOCK_TAGS
        for c in node.children
    )


def iter_blocks(root: Tag) -> Iterator[Block]:
    """
    Zwraca kwalifikujące się bloki w kolejności dokumentu.

    Lista kandydatów jest ustalana przed pierwszym blokiem, więc wywołujący
    może modyfikować tekst zwróconego bloku przed pobraniem kolejnego.
    """
    consumed: set[int] = set()

    for block_index, node in enumerate(root.find_all(list(CANDIDATE_TAGS))):
        if id(node) in consumed:
            continue

        text = flatten_text(node)
        if not text.strip():
            continue
        if has_block_child(node):
            continue  # kontener: jednostki dadzą głębsze węzły

        consumed.add(id(node))
        consumed.update(id(d) for d in node.descendants if isinstance(d, Tag))

        yield Block(block_index, node, text)
