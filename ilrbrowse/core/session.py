"""
Browser session: application state and the controller driving it.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ilrbrowse.core.article import Article
from ilrbrowse.core.errors import LoadError, ManifestLoadError
from ilrbrowse.core.loader import DatasetLoader
from ilrbrowse.core.notify import DANGER, INFO, SUCCESS, Notifier
from ilrbrowse.core.search import DEFAULT_PAGE_SIZE, Paginator, derive_categories, filter_articles
from ilrbrowse.utils.debounce import DEFAULT_QUIET_PERIOD, Debouncer

# Configure logging
logger = logging.getLogger(__name__)


def language_label(language: str) -> str:
    """Display name of a manifest language key."""
    return language[:1].upper() + language[1:]


@dataclass
class PageView:
    """
    One rendered page of results.
    """
    articles: List[Article]
    page: int
    total_pages: int
    total_results: int
    language: str = ""

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


@dataclass
class BrowserState:
    """
    Everything the browser knows about the current language and search.
    """
    page_size: int = DEFAULT_PAGE_SIZE
    language: str = ""
    articles: List[Article] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    filtered: List[Article] = field(default_factory=list)
    query: str = ""
    category: str = ""
    loading: bool = False
    generation: int = 0
    paginator: Optional[Paginator] = None

    def __post_init__(self):
        if self.paginator is None:
            self.paginator = Paginator(self.page_size)

    def install(self, language: str, articles: List[Article]) -> None:
        """Replace the collection wholesale; the level filter starts over, the topic is kept."""
        self.language = language
        self.articles = articles
        self.categories = derive_categories(articles)
        self.category = ""


class BrowserSession:
    """
    Sequences dataset loads, searches and page changes for one user.
    """
    def __init__(
        self,
        loader: DatasetLoader,
        notifier: Notifier,
        page_size: int = DEFAULT_PAGE_SIZE,
        debounce_seconds: float = DEFAULT_QUIET_PERIOD,
        on_render: Optional[Callable[[PageView], None]] = None,
        on_loading: Optional[Callable[[bool], None]] = None,
    ):
        """
        Initialize the BrowserSession.
        
        Args:
            loader: Dataset loader bound to a manifest
            notifier: Receives user-facing outcome messages
            page_size: Results per page
            debounce_seconds: Quiet period before a changed query is applied
            on_render: Called with the current page whenever it changes
            on_loading: Called with True/False as the loading indicator toggles
        """
        self.loader = loader
        self.notifier = notifier
        self.state = BrowserState(page_size=page_size)
        self.on_render = on_render
        self.on_loading = on_loading
        self.debouncer = Debouncer(self.search, debounce_seconds)

    async def populate_languages(self) -> List[str]:
        """
        Languages for the selector; empty if the manifest can't be loaded.
        """
        try:
            return await self.loader.available_languages()
        except ManifestLoadError as e:
            logger.error(f"Error loading available languages: {e}")
            self.notifier.notify("Failed to load available languages. Please try again later.", DANGER)
            return []

    def _set_loading(self, loading: bool) -> None:
        self.state.loading = loading
        if self.on_loading:
            self.on_loading(loading)

    async def select_language(self, language: str) -> bool:
        """
        Load a language and show its first page of results.

        A load that finishes after a newer one has started is discarded.
        On failure the previous collection stays in place.
        
        Args:
            language: Manifest key of the language
            
        Returns:
            True if the language's articles were installed
        """
        if not language:
            return False

        self.state.generation += 1
        generation = self.state.generation
        self._set_loading(True)
        try:
            articles = await self.loader.load(language)
        except LoadError as e:
            if generation != self.state.generation:
                logger.debug(f"Ignoring failure of superseded load for {language}: {e}")
                return False
            logger.error(f"Error loading data: {e}")
            self.notifier.notify("An error occurred while loading the data. Please try again.", DANGER)
            return False
        else:
            if generation != self.state.generation:
                logger.debug(f"Discarding superseded load for {language}")
                return False
            self.debouncer.cancel()
            self.state.install(language, articles)
            self.search()
            self.notifier.notify(f"Loaded {len(articles)} articles for {language}", SUCCESS)
            return True
        finally:
            if generation == self.state.generation:
                self._set_loading(False)

    def search(self) -> PageView:
        """
        Re-filter the collection with the current inputs and go back to page 1.
        """
        self.debouncer.cancel()
        self.state.filtered = filter_articles(self.state.articles, self.state.query, self.state.category)
        self.state.paginator.reset(self.state.filtered)
        logger.debug(
            f"Search {self.state.query!r} level {self.state.category!r}: "
            f"{len(self.state.filtered)} of {len(self.state.articles)} articles"
        )
        return self._render()

    def set_query(self, query: str) -> None:
        """Update the topic and schedule a debounced search."""
        self.state.query = query or ""
        self.debouncer.schedule()

    def set_category(self, category: str) -> None:
        """Update the ILR level and schedule a debounced search."""
        self.state.category = category or ""
        self.debouncer.schedule()

    def change_page(self, delta: int) -> bool:
        """
        Move by ``delta`` pages; out-of-range moves are ignored.
        
        Returns:
            True if the page changed and was re-rendered
        """
        if not self.state.paginator.change_page(delta):
            return False
        self._render()
        return True

    def current_page(self) -> PageView:
        paginator = self.state.paginator
        return PageView(
            articles=paginator.page(),
            page=paginator.current_page,
            total_pages=paginator.total_pages,
            total_results=len(self.state.filtered),
            language=language_label(self.state.language),
        )

    def save_for_later(self, article_id: str) -> None:
        self.notifier.notify(f"Article {article_id} saved for later", INFO)

    def _render(self) -> PageView:
        view = self.current_page()
        if self.on_render:
            self.on_render(view)
        return view
