"""
HTTP and file access utilities for ilrbrowse.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urljoin, urlparse

import aiohttp
import async_timeout

# Configure logging
logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30  # seconds


def is_url(location: str) -> bool:
    """Return True for http(s) locations."""
    return urlparse(location).scheme in ('http', 'https')


def resolve_location(location: str, base: str) -> str:
    """
    Resolve a data-file location against the manifest's location.

    Absolute URLs and absolute paths are returned unchanged; relative ones
    are taken relative to the directory (or URL) holding the manifest.
    
    Args:
        location: Location as written in the manifest
        base: Location of the manifest itself
        
    Returns:
        Resolved location
    """
    if is_url(location):
        return location
    if is_url(base):
        return urljoin(base, location)
    path = Path(location).expanduser()
    if path.is_absolute():
        return str(path)
    return str(Path(base).expanduser().parent / path)


def _read_file(path: str) -> str:
    # utf-8-sig strips the BOM spreadsheet exports like to add
    with open(path, 'r', encoding='utf-8-sig', newline='') as f:
        return f.read()


async def fetch_text(
    session: Optional[aiohttp.ClientSession],
    location: str,
    timeout: float = REQUEST_TIMEOUT,
) -> str:
    """
    Fetch the text behind a URL or local path.
    
    Args:
        session: HTTP session, required for URL locations
        location: URL or filesystem path
        timeout: Deadline in seconds for URL fetches
        
    Returns:
        Decoded text content

    Raises:
        aiohttp.ClientError, asyncio.TimeoutError, OSError, UnicodeDecodeError
    """
    if not is_url(location):
        logger.debug(f"Reading {location}")
        return await asyncio.get_running_loop().run_in_executor(None, _read_file, location)

    logger.debug(f"Fetching {location}")
    async with async_timeout.timeout(timeout):
        async with session.get(location) as response:
            response.raise_for_status()
            body = await response.read()
    return body.decode('utf-8-sig')
