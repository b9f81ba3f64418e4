"""
HTML rendering of result pages for ilrbrowse.
"""
import logging
from typing import Optional

from bs4 import BeautifulSoup

from ilrbrowse.core.article import Article
from ilrbrowse.core.session import PageView
from ilrbrowse.utils.text import is_rtl

# Configure logging
logger = logging.getLogger(__name__)

BOOTSTRAP_CSS = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css"

DEFAULT_CSS = """
body {
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
    padding: 20px;
}

.ilr-badge {
    float: right;
}

body.dark-mode {
    background-color: #121212;
    color: #e0e0e0;
}

body.dark-mode .card {
    background-color: #1e1e1e;
    color: #e0e0e0;
    border-color: #333;
}

body.dark-mode .text-muted {
    color: #aaa !important;
}
"""

EMPTY_MESSAGE = "No results found. Try adjusting your search criteria."
RTL_STYLE = "text-align: right; direction: rtl;"


class HtmlRenderer:
    """
    Renders a page of articles as a standalone HTML document of cards.
    """
    def __init__(self, css_file: Optional[str] = None):
        """
        Initialize the HtmlRenderer.
        
        Args:
            css_file: Optional path to a CSS file replacing the default styles
        """
        self.css_file = css_file
        self.css_content = self._load_css()

    def _load_css(self) -> str:
        """
        Load CSS content from file.
        
        Returns:
            CSS content as string
        """
        if not self.css_file:
            return DEFAULT_CSS
        try:
            with open(self.css_file, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            logger.warning(f"CSS file {self.css_file} not found. Using default styles.")
            return DEFAULT_CSS

    def _text(self, soup: BeautifulSoup, tag: str, text: str, rtl: bool = False, **attrs):
        element = soup.new_tag(tag, attrs=attrs)
        element.string = text
        if rtl:
            element['dir'] = 'rtl'
            element['style'] = RTL_STYLE
        return element

    def _card(self, soup: BeautifulSoup, article: Article, language: str):
        rtl = is_rtl(article.title + article.summary)

        column = soup.new_tag('div', attrs={'class': 'col-md-6 mb-4'})
        card = soup.new_tag('div', attrs={'class': 'card h-100', 'data-article-id': article.id})
        column.append(card)

        body = soup.new_tag('div', attrs={'class': 'card-body'})
        card.append(body)
        body.append(self._text(soup, 'span', f"ILR {article.ilr_level or 'N/A'}", **{'class': 'badge bg-primary ilr-badge'}))
        body.append(self._text(soup, 'h5', article.title, rtl, **{'class': 'card-title mb-3'}))
        body.append(self._text(soup, 'h6', language, **{'class': 'card-subtitle mb-2 text-muted'}))
        body.append(self._text(soup, 'h6', "Original Text", **{'class': 'card-subtitle mt-3 mb-2'}))
        body.append(self._text(soup, 'p', article.summary or 'No summary available', rtl, **{'class': 'card-text'}))
        body.append(self._text(soup, 'h6', "English Translation", **{'class': 'card-subtitle mt-3 mb-2'}))
        body.append(self._text(
            soup, 'p', article.translated_summary or 'No translated summary available', **{'class': 'card-text'}
        ))

        footer = soup.new_tag('div', attrs={'class': 'card-footer bg-transparent border-top-0'})
        card.append(footer)
        if article.link:
            footer.append(self._text(
                soup, 'a', "Read Full Article",
                href=article.link, target='_blank', rel='noopener',
                **{'class': 'btn btn-sm btn-outline-primary'}
            ))
        footer.append(self._text(
            soup, 'button', "Save for Later",
            type='button', **{'class': 'btn btn-sm btn-outline-secondary ms-2', 'data-article-id': article.id}
        ))
        return column

    def _pager(self, soup: BeautifulSoup, view: PageView):
        pager = soup.new_tag('div', attrs={'class': 'd-flex justify-content-center align-items-center gap-3'})
        previous = self._text(soup, 'button', "Previous", type='button', id='prevPage', **{'class': 'btn btn-outline-primary'})
        following = self._text(soup, 'button', "Next", type='button', id='nextPage', **{'class': 'btn btn-outline-primary'})
        if not view.has_previous:
            previous['disabled'] = 'disabled'
        if not view.has_next:
            following['disabled'] = 'disabled'
        pager.append(previous)
        pager.append(self._text(
            soup, 'span', f"Page {view.page} of {view.total_pages} ({view.total_results} results)", id='pageInfo'
        ))
        pager.append(following)
        return pager

    def render(self, view: PageView, dark_mode: bool = False, title: str = "ILR Article Browser") -> str:
        """
        Render a page of results.
        
        Args:
            view: Page to render
            dark_mode: Whether to apply the dark theme
            title: Document title
            
        Returns:
            HTML document as a string
        """
        soup = BeautifulSoup(
            "<!DOCTYPE html><html lang=\"en\"><head><meta charset=\"utf-8\"/></head><body></body></html>",
            'html.parser',
        )
        soup.head.append(self._text(soup, 'title', title))
        soup.head.append(soup.new_tag('link', rel='stylesheet', href=BOOTSTRAP_CSS))
        soup.head.append(self._text(soup, 'style', self.css_content))
        if dark_mode:
            soup.body['class'] = 'dark-mode'

        container = soup.new_tag('div', attrs={'class': 'container'})
        soup.body.append(container)
        container.append(self._text(soup, 'h1', title, **{'class': 'mb-4'}))

        results = soup.new_tag('div', id='results', attrs={'class': 'row'})
        container.append(results)

        if not view.articles:
            wrapper = soup.new_tag('div', attrs={'class': 'col-12'})
            wrapper.append(self._text(soup, 'div', EMPTY_MESSAGE, **{'class': 'alert alert-info'}))
            results.append(wrapper)
        else:
            for article in view.articles:
                results.append(self._card(soup, article, view.language))

        container.append(self._pager(soup, view))

        logger.debug(f"Rendered page {view.page}/{view.total_pages} with {len(view.articles)} articles")
        return soup.prettify()

    def write(self, view: PageView, html_file_path: str, dark_mode: bool = False) -> None:
        """
        Render a page and write it to a file.
        """
        with open(html_file_path, 'w', encoding='utf-8') as html_file:
            html_file.write(self.render(view, dark_mode=dark_mode))
        logger.info(f"Wrote page {view.page} to {html_file_path}")
