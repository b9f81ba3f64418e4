"""
Exceptions raised while loading article datasets.
"""


class BrowserError(Exception):
    """Base class for ilrbrowse errors."""


class ManifestLoadError(BrowserError):
    """The manifest could not be fetched or parsed."""


class LoadError(BrowserError):
    """A language dataset could not be loaded; no partial results are kept."""


class NotFoundError(LoadError):
    """The manifest lists no data files for the requested language."""

    def __init__(self, language: str):
        super().__init__(f"No CSV files found for language: {language}")
        self.language = language
