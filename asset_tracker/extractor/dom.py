"""
Asset Tracker — HTML Document Adapter

The extractor only needs five DOM capabilities. HtmlDocument names them;
SoupDocument satisfies them with BeautifulSoup over lxml, whose HTML parser
closes cells and rows left open by pages that omit </td> and </tr>.
"""

from __future__ import annotations

import unicodedata
from typing import Any, Iterator, Protocol

from bs4 import BeautifulSoup, Tag

TEXT_ELEMENT_TAGS = ("div", "span", "p")


class HtmlDocument(Protocol):
    def rows(self) -> Iterator[Any]: ...

    def cells(self, row: Any, include_headers: bool = False) -> list[Any]: ...

    def text(self, element: Any) -> str: ...

    def parent_text(self, element: Any) -> str: ...

    def text_elements(self) -> Iterator[Any]: ...


def normalize_text(text: str) -> str:
    """NFC-normalize so composed and decomposed Vietnamese diacritics compare equal."""
    return unicodedata.normalize("NFC", text)


class SoupDocument:
    """HtmlDocument backed by a parsed BeautifulSoup tree."""

    def __init__(self, html: str) -> None:
        self._soup = BeautifulSoup(html, "lxml")

    def rows(self) -> Iterator[Tag]:
        yield from self._soup.find_all("tr")

    def cells(self, row: Tag, include_headers: bool = False) -> list[Tag]:
        names = ["td", "th"] if include_headers else ["td"]
        return row.find_all(names)

    def text(self, element: Tag) -> str:
        return normalize_text(element.get_text())

    def parent_text(self, element: Tag) -> str:
        parent = element.parent
        if parent is None:
            return ""
        return normalize_text(parent.get_text())

    def text_elements(self) -> Iterator[Tag]:
        yield from self._soup.find_all(TEXT_ELEMENT_TAGS)
