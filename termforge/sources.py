"""
Resource document retrieval.

Fetches resource YAML from:
- Local paths and file:// URLs
- http:// and https:// URLs
- GitHub shorthand: github:owner/repo/path/to/file.yaml[@ref]

Nothing is cached and failed requests are not retried.
"""

import logging
from pathlib import Path
from typing import List
from urllib.parse import urlparse

import requests

from .models.loader import Resource, ResourceLoadError, load_documents

logger = logging.getLogger(__name__)

GITHUB_RAW_URL = "https://raw.githubusercontent.com"
DEFAULT_GITHUB_REF = "main"
REQUEST_TIMEOUT = 30


class SourceLoadError(Exception):
    """Raised when a resource document cannot be fetched."""

    pass


def is_source_ref(ref: str) -> bool:
    """
    Whether a command-line argument names a document rather than a library
    resource: URLs, github: refs, YAML files and anything with a path separator.
    """
    if ref.startswith(("http://", "https://", "file://", "github:")):
        return True
    if ref.endswith((".yaml", ".yml")) or "/" in ref or ref.startswith("~"):
        return True
    return Path(ref).is_file()


def github_raw_url(ref: str) -> str:
    """Map ``github:owner/repo/path[@ref]`` to a raw.githubusercontent.com URL."""
    location = ref[len("github:") :]
    git_ref = DEFAULT_GITHUB_REF
    if "@" in location:
        location, git_ref = location.rsplit("@", 1)
    parts = [p for p in location.split("/") if p]
    if len(parts) < 3 or not git_ref:
        raise SourceLoadError(
            f"Invalid GitHub reference: {ref} (expected github:owner/repo/path[@ref])"
        )
    owner, repo, path = parts[0], parts[1], "/".join(parts[2:])
    return f"{GITHUB_RAW_URL}/{owner}/{repo}/{git_ref}/{path}"


class SourceLoader:
    """Load resource documents from files, URLs and GitHub."""

    def __init__(self, timeout: int = REQUEST_TIMEOUT):
        self.timeout = timeout

    def fetch(self, ref: str) -> str:
        """
        Fetch the raw text of a document.

        Args:
            ref: Path, file:// or http(s):// URL, or github: shorthand

        Returns:
            Document text

        Raises:
            SourceLoadError: If the document cannot be read
        """
        if ref.startswith("github:"):
            return self._fetch_http(github_raw_url(ref))

        parsed = urlparse(ref)
        if parsed.scheme in ("http", "https"):
            return self._fetch_http(ref)
        if parsed.scheme == "file":
            return self._fetch_file(Path(parsed.path))
        if parsed.scheme == "" or len(parsed.scheme) == 1:
            # No scheme, or a Windows drive letter
            return self._fetch_file(Path(ref))
        raise SourceLoadError(f"Unsupported URL scheme: {parsed.scheme} in {ref}")

    def load(self, ref: str) -> List[Resource]:
        """Fetch a document and parse every resource it contains."""
        text = self.fetch(ref)
        try:
            return load_documents(text)
        except ResourceLoadError as e:
            raise ResourceLoadError(f"{ref}: {e}") from e

    def _fetch_http(self, url: str) -> str:
        logger.info(f"Fetching {url}")
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise SourceLoadError(f"Failed to fetch {url}: {e}") from e
        return response.text

    def _fetch_file(self, file_path: Path) -> str:
        expanded_path = file_path.expanduser()
        logger.debug(f"Reading {expanded_path}")
        try:
            return expanded_path.read_text(encoding="utf-8")
        except OSError as e:
            raise SourceLoadError(f"Failed to read {expanded_path}: {e}") from e
