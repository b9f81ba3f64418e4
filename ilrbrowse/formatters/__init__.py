"""
Renderers for pages of articles.
"""
from ilrbrowse.formatters.html import HtmlRenderer
from ilrbrowse.formatters.text import TextRenderer

__all__ = ["HtmlRenderer", "TextRenderer"]
