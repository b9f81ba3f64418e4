"""
Text helpers for ilrbrowse.
"""
import re

# Arabic, Arabic Supplement, Arabic Extended-A and the presentation forms
RTL_PATTERN = re.compile('[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]')


def is_rtl(text: str) -> bool:
    """Return True if the text contains right-to-left script."""
    return bool(text) and RTL_PATTERN.search(text) is not None


def shorten(text: str, width: int = 300) -> str:
    """Collapse whitespace and cut text to ``width`` characters."""
    text = re.sub(r'\s+', ' ', text or '').strip()
    if len(text) <= width:
        return text
    return text[:width].rstrip() + "..."
