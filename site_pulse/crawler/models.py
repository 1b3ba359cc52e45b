# site_pulse/crawler/models.py
"""
Data models for the SitePulse fetch pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from site_pulse.parser.html_parser import ExtractedPage


@dataclass(frozen=True, slots=True)
class ScrapeResult:
    """Outcome of the whole attempt sequence for one URL.

    A failed result never carries content: every text field is empty and
    ``all_headers`` is an empty list.
    """

    url: str
    is_active: bool = False
    status: Optional[int] = None
    page_title: str = ""
    h1: str = ""
    all_headers: List[str] = field(default_factory=list)
    description: str = ""

    @classmethod
    def success(cls, url: str, status: int, page: ExtractedPage) -> ScrapeResult:
        return cls(
            url=url,
            is_active=True,
            status=status,
            page_title=page.title,
            h1=page.h1,
            all_headers=list(page.all_headers),
            description=page.description,
        )

    @classmethod
    def failure(cls, url: str) -> ScrapeResult:
        return cls(url=url)
