"""
Article data model for ilrbrowse.
"""
import uuid
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

# Source columns consumed by the browser; anything else lands in ``extra``
KNOWN_COLUMNS = (
    "id",
    "title",
    "summary",
    "translated_summary",
    "translated",
    "ilr_quantized",
    "link",
)


def generate_id() -> str:
    """Generate an identifier for rows that don't carry one."""
    return uuid.uuid4().hex


@dataclass
class Article:
    """
    Represents one normalized article entry of a language dataset.
    """
    id: str
    title: str = ""
    summary: str = ""
    translated_summary: str = ""
    ilr_level: str = ""
    link: str = ""
    extra: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Mapping[Optional[str], object]) -> "Article":
        """
        Build an Article from a CSV row, filling defaults for missing fields.

        Args:
            row: Mapping of column name to cell value

        Returns:
            Normalized Article
        """
        def value(key: str) -> str:
            cell = row.get(key)
            if cell is None:
                return ""
            return str(cell)

        # DictReader stores surplus cells under a None key
        extra = {
            key: value(key)
            for key in row
            if key is not None and key not in KNOWN_COLUMNS
        }

        return cls(
            id=value("id") or generate_id(),
            title=value("title"),
            summary=value("summary"),
            translated_summary=value("translated_summary") or value("translated"),
            ilr_level=value("ilr_quantized"),
            link=value("link"),
            extra=extra,
        )
