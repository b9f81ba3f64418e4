import csv
from pathlib import Path
from typing import Dict, List, Sequence

from ilrbrowse.core.article import Article
from ilrbrowse.core.notify import Notifier

FIELDS = ["id", "title", "summary", "translated_summary", "ilr_quantized", "link"]


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.messages = []

    def notify(self, message: str, severity: str = "info") -> None:
        super().notify(message, severity)
        self.messages.append((message, severity))


def make_article(title: str = "", ilr_level: str = "", **fields) -> Article:
    fields.setdefault("id", title or "article")
    return Article(title=title, ilr_level=ilr_level, **fields)


def make_articles(count: int) -> List[Article]:
    return [make_article(f"Article {i}", str(i % 3 + 1), id=f"a{i}") for i in range(count)]


def write_csv(path: Path, rows: Sequence[Dict[str, str]], fieldnames: Sequence[str] = FIELDS) -> Path:
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
    return path
