"""Reference asset retrieval.

ClinVar/SNPedia exports and PRS tables are static JSON assets that may live
on disk or behind a URL. Remote assets are downloaded once into a local cache
and read from there afterwards. Any failure here is fatal to the run: the
matching core assumes its inputs are already valid decoded JSON.
"""

import hashlib
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import httpx

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 300.0


class ReferenceLoadError(Exception):
    """Raised when a reference asset cannot be read, fetched or decoded."""

    pass


def get_default_cache_dir() -> Path:
    """Get the default cache directory for downloaded reference data."""
    return Path.home() / ".genome-report" / "references"


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and urlparse(source).scheme in ("http", "https")


def verify_checksum(file_path: Path, expected: str) -> bool:
    """Verify SHA256 checksum of a file.

    Args:
        file_path: Path to file to verify
        expected: Expected SHA256 hex digest

    Returns:
        True if checksum matches, False otherwise

    Raises:
        FileNotFoundError: If file does not exist
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    sha256 = hashlib.sha256()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            sha256.update(chunk)

    return sha256.hexdigest() == expected.lower()


@dataclass
class ReferenceDownloadConfig:
    """Configuration for downloading a single reference asset."""

    url: str
    cache_dir: Path = field(default_factory=get_default_cache_dir)
    checksum: str | None = None

    def __post_init__(self):
        if not is_url(self.url):
            raise ValueError(f"Invalid reference URL '{self.url}'. Must be http(s)")
        if isinstance(self.cache_dir, str):
            self.cache_dir = Path(self.cache_dir)

    def get_cache_path(self) -> Path:
        """Get the cache file path, named after the URL's last path segment."""
        name = Path(urlparse(self.url).path).name or "reference.json"
        digest = hashlib.sha256(self.url.encode("utf-8")).hexdigest()[:12]
        return self.cache_dir / f"{digest}_{name}"


class ReferenceDownloader:
    """Downloads and caches a reference asset."""

    def __init__(self, config: ReferenceDownloadConfig):
        self.config = config

    def is_cached(self) -> bool:
        cache_path = self.config.get_cache_path()
        return cache_path.exists() and cache_path.stat().st_size > 0

    def download(
        self,
        force: bool = False,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> Path:
        """Download the asset unless a cached copy exists.

        Args:
            force: Force re-download even if cached
            progress_callback: Optional callback for progress updates

        Returns:
            Path to the downloaded/cached file

        Raises:
            ReferenceLoadError: On HTTP errors or checksum mismatch
        """
        cache_path = self.config.get_cache_path()

        if self.is_cached() and not force:
            logger.info("Using cached reference: %s", cache_path)
            return cache_path

        cache_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self._download_file(cache_path, progress_callback)
        except httpx.HTTPError as e:
            cache_path.unlink(missing_ok=True)
            raise ReferenceLoadError(f"Failed to download {self.config.url}: {e}") from e

        if self.config.checksum and not verify_checksum(cache_path, self.config.checksum):
            cache_path.unlink(missing_ok=True)
            raise ReferenceLoadError(
                f"Checksum verification failed for {self.config.url}. "
                "The file may be corrupted or tampered with."
            )

        logger.info("Downloaded reference to: %s", cache_path)
        return cache_path

    def _download_file(
        self,
        cache_path: Path,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> None:
        url = self.config.url
        logger.info("Downloading reference from: %s", url)

        with httpx.Client(follow_redirects=True, timeout=DOWNLOAD_TIMEOUT) as client:
            with client.stream("GET", url) as response:
                response.raise_for_status()

                total_size = int(response.headers.get("content-length", 0))
                downloaded = 0

                with open(cache_path, "wb") as f:
                    for chunk in response.iter_bytes(chunk_size=8192):
                        f.write(chunk)
                        downloaded += len(chunk)
                        if progress_callback and total_size:
                            progress_callback(downloaded, total_size)


def resolve_source(
    source: str | Path,
    cache_dir: Path | None = None,
    checksum: str | None = None,
    force: bool = False,
) -> Path:
    """Return a local path for a reference source, downloading URLs first."""
    if is_url(source):
        config = ReferenceDownloadConfig(
            url=str(source),
            cache_dir=cache_dir or get_default_cache_dir(),
            checksum=checksum,
        )
        return ReferenceDownloader(config).download(force=force)

    path = Path(source)
    if not path.exists():
        raise ReferenceLoadError(f"Reference file not found: {path}")
    if checksum and not verify_checksum(path, checksum):
        raise ReferenceLoadError(f"Checksum verification failed for {path}")
    return path


def load_json_source(
    source: str | Path,
    cache_dir: Path | None = None,
    checksum: str | None = None,
) -> Any:
    """Read and decode a JSON reference asset from a path or URL.

    Raises:
        ReferenceLoadError: If the asset is missing, unreachable or not JSON
    """
    path = resolve_source(source, cache_dir=cache_dir, checksum=checksum)
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ReferenceLoadError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ReferenceLoadError(f"Cannot read {path}: {e}") from e
