# === FILE: site_pulse/parser/html_parser.py ===
"""Field extraction from fetched HTML documents.

:func:`extract` turns a response body into an :class:`ExtractedPage`:

* title       : text of the first ``<title>``, ``""`` if absent.
* h1          : text of the first ``<h1>``, ``""`` if absent.
* all_headers : text of every ``<h1>``/``<h2>`` in document order,
  skipping elements without text.
* description : ``content`` of ``<meta name="description">``, ``""`` if absent.

All values are whitespace-trimmed. Malformed or empty markup never raises:
missing elements simply produce empty fields.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Union

from bs4 import BeautifulSoup

__all__: Sequence[str] = ("ExtractedPage", "extract")

_HEADING_TAGS = ["h1", "h2"]


@dataclass(frozen=True, slots=True)
class ExtractedPage:
    """Structured fields pulled out of one HTML document."""

    title: str = ""
    h1: str = ""
    all_headers: list[str] = field(default_factory=list)
    description: str = ""


def _first_text(soup: BeautifulSoup, name: str) -> str:
    tag = soup.find(name)
    return tag.get_text().strip() if tag else ""


def extract(document: Union[str, bytes]) -> ExtractedPage:
    """Parse *document* (markup as text or raw bytes) and pull out the page fields."""
    soup = BeautifulSoup(document or "", "html.parser")

    headers: list[str] = []
    for tag in soup.find_all(_HEADING_TAGS):
        text = tag.get_text().strip()
        if text:
            headers.append(text)

    meta = soup.find("meta", attrs={"name": "description"})
    content = meta.get("content") if meta else None

    return ExtractedPage(
        title=_first_text(soup, "title"),
        h1=_first_text(soup, "h1"),
        all_headers=headers,
        description=(content or "").strip(),
    )
