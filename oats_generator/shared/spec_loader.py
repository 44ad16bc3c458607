"""Spec loading utilities: read, fetch, parse and upgrade OpenAPI documents."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

import requests
import yaml
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import SpecImportError
from .swagger import convert_swagger2

logger = logging.getLogger(__name__)

YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yml", ".yaml"})
GITHUB_RAW_URL: Final[str] = "https://raw.githubusercontent.com/{owner}/{repo}/{branch}/{path}"
REQUEST_TIMEOUT: Final[float] = 10.0


@dataclass(frozen=True, slots=True)
class CacheKey:
    """Immutable cache key for spec files."""

    path: Path
    mtime: float
    size: int

    @classmethod
    def from_path(cls, path: Path) -> CacheKey:
        """Create a cache key from a file path."""
        stat = path.stat()
        return cls(
            path=path.resolve(),
            mtime=stat.st_mtime,
            size=stat.st_size,
        )


class SourceCache:
    """Cache of raw spec sources for a single run.

    Files are invalidated automatically when they change on disk (based on
    mtime and size); URLs are fetched once.
    """

    __slots__ = ("_files", "_urls")

    def __init__(self) -> None:
        self._files: dict[Path, tuple[CacheKey, str, str]] = {}
        self._urls: dict[str, tuple[str, str]] = {}

    def read_file(self, path: Path) -> tuple[str, str]:
        """Return `(text, format)` for a file, reading it if necessary."""
        resolved = path.resolve()
        if not resolved.is_file():
            raise SpecImportError(f"Spec file '{path}' does not exist")
        current_key = CacheKey.from_path(resolved)

        cached = self._files.get(resolved)
        if cached is not None and cached[0] == current_key:
            return cached[1], cached[2]

        text, fmt = read_spec_file(resolved)
        self._files[resolved] = (current_key, text, fmt)
        return text, fmt

    def fetch_url(self, url: str) -> tuple[str, str]:
        """Return `(text, format)` for a URL, fetching it once."""
        if url not in self._urls:
            self._urls[url] = fetch_spec_url(url)
        return self._urls[url]

    def fetch_github(self, locator: str, token: str | None = None) -> tuple[str, str]:
        """Return `(text, format)` for a GitHub locator, fetching it once."""
        url = github_raw_url(locator)
        if url not in self._urls:
            self._urls[url] = fetch_github_spec(locator, token)
        return self._urls[url]

    def __len__(self) -> int:
        return len(self._files) + len(self._urls)


def detect_format(name: str) -> str:
    """Guess the spec format (`yaml` or `json`) from a file name or URL."""
    suffix = Path(name.split("?", 1)[0]).suffix.lower()
    return "yaml" if suffix in YAML_SUFFIXES else "json"


def parse_spec(data: str, fmt: str) -> dict[str, Any]:
    """Parse raw spec text.

    Args:
        data: The raw document.
        fmt: Either `yaml` or `json`.

    Returns:
        The parsed document.

    Raises:
        SpecImportError: If the text cannot be parsed or is not a mapping.
    """
    if fmt == "yaml":
        try:
            spec = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise SpecImportError(f"Invalid YAML: {e}") from e
    elif fmt == "json":
        try:
            spec = json.loads(data)
        except json.JSONDecodeError as e:
            raise SpecImportError(f"Invalid JSON: {e}") from e
    else:
        raise SpecImportError(f"Unknown spec format '{fmt}' (expected 'yaml' or 'json')")

    if not isinstance(spec, dict):
        raise SpecImportError("Spec root must be a mapping")
    return spec


def import_specs(data: str, fmt: str) -> dict[str, Any]:
    """Parse a spec and normalize it to OpenAPI 3.0.

    Swagger 2.0 documents are upgraded; any other version is rejected.
    """
    spec = parse_spec(data, fmt)

    if str(spec.get("swagger", "")).startswith("2."):
        logger.debug("Upgrading Swagger %s document to OpenAPI 3.0", spec["swagger"])
        return convert_swagger2(spec)

    version = str(spec.get("openapi", ""))
    if version.startswith("3.0"):
        return spec

    raise SpecImportError(
        f"Unsupported spec version '{version or spec.get('swagger', 'unknown')}' "
        "(only OpenAPI 3.0 and Swagger 2.0 are supported)"
    )


def read_spec_file(path: Path) -> tuple[str, str]:
    """Read a spec file from disk.

    Returns:
        A `(text, format)` tuple.

    Raises:
        SpecImportError: If the file cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SpecImportError(f"Failed to read spec file: {e}", str(path)) from e
    return text, detect_format(path.name)


def _session() -> requests.Session:
    session = requests.Session()
    retries = Retry(total=3, backoff_factor=0.5, status_forcelist=(500, 502, 503, 504))
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def fetch_spec_url(url: str, headers: dict[str, str] | None = None) -> tuple[str, str]:
    """Fetch a spec over HTTP(S).

    Uses urllib3 Retry via requests.adapters.HTTPAdapter.

    Returns:
        A `(text, format)` tuple. The format comes from the URL suffix, or
        from the Content-Type header when the URL has no known suffix.

    Raises:
        SpecImportError: If the request fails.
    """
    logger.debug("Fetching spec from %s", url)
    try:
        resp = _session().get(url, headers=headers or {}, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise SpecImportError(f"Failed to fetch spec: {e}", url) from e

    fmt = detect_format(url)
    suffix = Path(url.split("?", 1)[0]).suffix.lower()
    if suffix not in YAML_SUFFIXES and suffix != ".json":
        content_type = resp.headers.get("Content-Type", "")
        if "yaml" in content_type:
            fmt = "yaml"
    return resp.text, fmt


def github_raw_url(locator: str) -> str:
    """Build the raw-content URL for an `owner:repo:branch:path` locator."""
    parts = locator.split(":", 3)
    if len(parts) != 4 or not all(parts):
        raise SpecImportError(
            f"Invalid GitHub locator '{locator}' (expected 'owner:repo:branch:path')"
        )
    owner, repo, branch, path = parts
    return GITHUB_RAW_URL.format(owner=owner, repo=repo, branch=branch, path=path.lstrip("/"))


def fetch_github_spec(locator: str, token: str | None = None) -> tuple[str, str]:
    """Fetch a spec stored in a GitHub repository.

    The token defaults to the `GITHUB_TOKEN` environment variable and is only
    needed for private repositories.
    """
    url = github_raw_url(locator)
    token = token or os.environ.get("GITHUB_TOKEN")
    headers = {"Authorization": f"token {token}"} if token else None
    return fetch_spec_url(url, headers=headers)
