"""
Plain-text rendering of result pages for the terminal.
"""
from typing import List

from ilrbrowse.core.session import PageView
from ilrbrowse.utils.text import shorten


class TextRenderer:
    """
    Renders a page of articles as a numbered terminal listing.
    """
    def __init__(self, summary_width: int = 300):
        self.summary_width = summary_width

    def render(self, view: PageView) -> str:
        if not view.articles:
            return "No results found. Try adjusting your search criteria.\n" \
                f"Page {view.page} of {view.total_pages}\n"

        lines: List[str] = []
        for offset, article in enumerate(view.articles, 1):
            lines.append(f"{offset}. [ILR {article.ilr_level or 'N/A'}] {article.title or '(untitled)'}")
            lines.append(f"   id: {article.id}")
            lines.append(f"   {shorten(article.summary, self.summary_width) or 'No summary available'}")
            lines.append(
                f"   EN: {shorten(article.translated_summary, self.summary_width) or 'No translated summary available'}"
            )
            if article.link:
                lines.append(f"   {article.link}")
            lines.append("")

        lines.append(f"Page {view.page} of {view.total_pages} ({view.total_results} results)")
        return "\n".join(lines) + "\n"
