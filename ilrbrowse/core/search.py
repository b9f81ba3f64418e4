"""
Filtering, category indexing and pagination over loaded articles.
"""
import math
from typing import Iterable, List, Sequence, Tuple

from ilrbrowse.core.article import Article

DEFAULT_PAGE_SIZE = 50
ALL_LEVELS_LABEL = "All Levels"


def derive_categories(articles: Iterable[Article]) -> List[str]:
    """
    Distinct ILR levels present in a collection, sorted lexicographically.

    The empty level is kept when some article has no level.
    """
    return sorted({article.ilr_level for article in articles})


def category_label(level: str) -> str:
    """Label shown for a level in the filter control."""
    return f"ILR {level or 'N/A'}"


def matches(article: Article, query: str, category: str = "") -> bool:
    """
    Check one article against a lowercased query and a category.
    """
    if category and article.ilr_level != category:
        return False
    if not query:
        return True
    return (
        query in article.title.lower()
        or query in article.summary.lower()
        or query in article.translated_summary.lower()
    )


def filter_articles(articles: Iterable[Article], query: str = "", category: str = "") -> List[Article]:
    """
    Select the articles matching a topic query and an ILR level.

    Matching is a case-insensitive substring test against the title, the
    summary and the translated summary; an empty query matches everything.
    An empty category places no restriction on the level. Source order is
    preserved and a new list is always returned.
    
    Args:
        articles: Collection to filter
        query: Free-text topic
        category: Exact ILR level, or empty for all levels
        
    Returns:
        Matching articles in source order
    """
    query = (query or "").lower()
    category = category or ""
    return [article for article in articles if matches(article, query, category)]


def total_pages(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages for ``count`` items; never less than one."""
    if page_size < 1:
        raise ValueError(f"page_size must be a positive integer, got {page_size}")
    return max(1, math.ceil(count / page_size))


def paginate(items: Sequence[Article], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> Tuple[List[Article], int]:
    """
    Slice one page out of a filtered collection.
    
    Args:
        items: Filtered collection
        page: 1-based page number
        page_size: Items per page
        
    Returns:
        Tuple of (page slice, total pages)
    """
    pages = total_pages(len(items), page_size)
    start = (page - 1) * page_size
    if page < 1 or start >= len(items):
        return [], pages
    return list(items[start:start + page_size]), pages


class Paginator:
    """
    Pagination cursor over the current filtered collection.
    """
    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        total_pages(0, page_size)  # validates page_size
        self.page_size = page_size
        self.current_page = 1
        self._items: Sequence[Article] = []

    @property
    def total_pages(self) -> int:
        return total_pages(len(self._items), self.page_size)

    def reset(self, items: Sequence[Article]) -> None:
        """Point the cursor at a freshly filtered collection, back on page 1."""
        self._items = items
        self.current_page = 1

    def change_page(self, delta: int) -> bool:
        """
        Move the cursor by ``delta`` pages.

        Returns:
            True if the page changed, False if the move was out of range
        """
        new_page = self.current_page + delta
        if new_page < 1 or new_page > self.total_pages:
            return False
        self.current_page = new_page
        return True

    def page(self) -> List[Article]:
        """Articles on the current page."""
        items, _ = paginate(self._items, self.current_page, self.page_size)
        return items
