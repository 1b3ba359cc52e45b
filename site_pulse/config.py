# === FILE: site_pulse/config.py ===
"""
Loading and validation of the SitePulse scraper configuration.
Pydantic describes the schema and checks the data.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/121.0.0.0"


class OutputConfig(BaseModel):
    """Where the report writers and the log file put their output."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    results_json: Path = Field(Path("results.json"), description="Structured JSON report.")
    summary_txt: Path = Field(Path("summary.txt"), description="Human-readable summary.")
    log_file: Optional[Path] = Field(Path("scraper.log"), description="Log file; null disables it.")


class ScraperConfig(BaseModel):
    """Configuration for one scraping run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    urls: List[str] = Field(default_factory=list, description="Pages to fetch.")
    concurrency: int = Field(20, ge=1, description="Number of concurrent workers.")
    timeout: float = Field(15.0, gt=0, description="Timeout for a single request (seconds).")
    retry_attempts: int = Field(3, ge=1, description="Total attempts per URL.")
    backoff_base: float = Field(2.0, gt=0, description="Backoff before retry i is base**i seconds.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    scan_timeout: Optional[float] = Field(
        None, gt=0, description="Deadline for the whole run (seconds); cancels in-flight work."
    )
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("urls", mode="before")
    def _strip_urls(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return [u.strip() for u in v if isinstance(u, str) and u.strip()]
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> ScraperConfig:
    """
    Reads YAML or JSON and returns a validated ScraperConfig.

    With *path* None the default ``configs/default.yaml`` is used when present,
    otherwise the built-in defaults. An explicit path that does not exist raises
    FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return ScraperConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return ScraperConfig(**data)
