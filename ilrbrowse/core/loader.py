"""
Dataset loading for ilrbrowse.
"""
import asyncio
import csv
import io
import json
import logging
import sys
from typing import Callable, Dict, List, Optional

import aiohttp

from ilrbrowse.core.article import Article
from ilrbrowse.core.errors import LoadError, ManifestLoadError, NotFoundError
from ilrbrowse.utils.http import REQUEST_TIMEOUT, fetch_text, is_url, resolve_location

# Configure logging
logger = logging.getLogger(__name__)

# Summaries can run well past the csv module's default 128 KiB cell limit
try:
    csv.field_size_limit(sys.maxsize)
except OverflowError:
    csv.field_size_limit(2 ** 31 - 1)

# Errors that abort a load; anything else is a bug and propagates as is
FETCH_ERRORS = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
    OSError,
    UnicodeDecodeError,
)


def parse_articles(text: str, source: str = "") -> List[Article]:
    """
    Parse CSV text with a header row into normalized articles.
    
    Args:
        text: CSV content
        source: Name of the file, for diagnostics
        
    Returns:
        Articles in row order
    """
    reader = csv.DictReader(io.StringIO(text))
    rows = list(reader)
    logger.debug(f"Available fields in {source or 'dataset'}: {reader.fieldnames}")
    return [Article.from_row(row) for row in rows]


class DatasetLoader:
    """
    Resolves a language through the manifest and loads its data files.
    """
    def __init__(
        self,
        manifest: str = "available_files.json",
        timeout: float = REQUEST_TIMEOUT,
        progress: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize the DatasetLoader.
        
        Args:
            manifest: URL or path of the manifest JSON
            timeout: Deadline in seconds for each HTTP fetch
            progress: Called with each file location once it has been fetched
        """
        self.manifest = manifest
        self.timeout = timeout
        self.progress = progress
        self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """
        Lazy initialization of aiohttp session.
        
        Returns:
            aiohttp.ClientSession: The HTTP session
        """
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self):
        """Close aiohttp session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "DatasetLoader":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _fetch(self, location: str) -> str:
        # Local-only datasets never open an HTTP session
        session = self.session if is_url(location) else None
        return await fetch_text(session, location, self.timeout)

    async def load_manifest(self) -> Dict[str, List[str]]:
        """
        Fetch and parse the manifest. It is fetched afresh on every call.
        
        Returns:
            Mapping of language key to data-file locations

        Raises:
            ManifestLoadError: If the manifest is unreachable or malformed
        """
        try:
            text = await self._fetch(self.manifest)
            manifest = json.loads(text)
        except (json.JSONDecodeError, *FETCH_ERRORS) as e:
            logger.error(f"Error loading manifest {self.manifest}: {e}")
            raise ManifestLoadError(f"Could not load manifest {self.manifest}: {e}") from e

        if not isinstance(manifest, dict):
            logger.error(f"Manifest {self.manifest} is not a JSON object")
            raise ManifestLoadError(f"Manifest {self.manifest} must map languages to file lists")
        return manifest

    async def available_languages(self) -> List[str]:
        """
        Languages listed in the manifest, in manifest order.
        """
        return list(await self.load_manifest())

    async def _load_file(self, location: str) -> List[Article]:
        text = await self._fetch(location)
        articles = parse_articles(text, source=location)
        if self.progress:
            self.progress(location)
        return articles

    async def load(self, language: str) -> List[Article]:
        """
        Load every data file of a language into one collection.

        Files are fetched concurrently and concatenated in manifest order.
        The load is all-or-nothing: if any file fails, nothing is returned.
        
        Args:
            language: Manifest key of the language
            
        Returns:
            Normalized articles of all files

        Raises:
            NotFoundError: If the manifest lists no files for the language
            LoadError: If the manifest or any file cannot be fetched or parsed
        """
        try:
            manifest = await self.load_manifest()
        except ManifestLoadError as e:
            raise LoadError(str(e)) from e

        files = manifest.get(language)
        if not isinstance(files, list) or not files:
            raise NotFoundError(language)

        locations = [resolve_location(str(location), self.manifest) for location in files]
        logger.info(f"Loading {len(locations)} file(s) for {language}")

        tasks = [asyncio.ensure_future(self._load_file(location)) for location in locations]
        try:
            results = await asyncio.gather(*tasks)
        except (csv.Error, *FETCH_ERRORS) as e:
            for task in tasks:
                task.cancel()
            logger.error(f"Error loading data for {language}: {e}")
            raise LoadError(f"Could not load data for {language}: {e}") from e

        articles = [article for file_articles in results for article in file_articles]
        if articles:
            logger.debug(f"Sample processed article: {articles[0]}")
        logger.info(f"Loaded {len(articles)} articles for {language}")
        return articles
