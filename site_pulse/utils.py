# File: site_pulse/utils.py
"""site_pulse.utils: helpers for URL normalisation and reading URL lists."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Union

from site_pulse.logger import logger

__all__: Sequence[str] = (
    "normalize_url",
    "read_url_list",
)

_SCHEMES = ("http://", "https://")


def normalize_url(url: str) -> str:
    """Prepends ``https://`` when *url* has no http(s) scheme."""
    url = url.strip()
    if url.lower().startswith(_SCHEMES):
        return url
    normalized = f"https://{url}"
    logger.debug("Normalized URL: %s -> %s", url, normalized)
    return normalized


def read_url_list(path: Union[str, Path]) -> List[str]:
    """Reads one URL per line, skipping blank lines and ``#`` comments."""
    p = Path(path).expanduser()
    if not p.exists():
        logger.error("URL list not found: %s", p)
        raise FileNotFoundError(f"URL list file not found: {p}")
    urls = []
    for line in p.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            urls.append(line)
    logger.debug("Loaded %d URLs from %s", len(urls), p)
    return urls
