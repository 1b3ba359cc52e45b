"""HTML document extraction for SitePulse."""

from site_pulse.parser.html_parser import ExtractedPage, extract

__all__ = ["ExtractedPage", "extract"]
