import json
from pathlib import Path

import pytest

from tests.helpers import RecordingNotifier, write_csv


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def dataset_dir(tmp_path: Path) -> Path:
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    write_csv(
        data_dir / "arabic_1.csv",
        [
            {"id": "ar-1", "title": "Weather Report", "summary": "الطقس اليوم", "translated_summary": "Today's weather", "ilr_quantized": "2", "link": "https://example.com/1"},
            {"id": "ar-2", "title": "Sports News", "summary": "أخبار الرياضة", "translated_summary": "Sports news", "ilr_quantized": "3", "link": ""},
        ],
    )
    write_csv(
        data_dir / "arabic_2.csv",
        [
            {"id": "ar-3", "title": "Market Update", "summary": "السوق", "translated_summary": "The market", "ilr_quantized": "2", "link": ""},
        ],
    )
    write_csv(
        data_dir / "spanish_1.csv",
        [{"title": "El tiempo", "summary": "Hace sol", "translated": "It is sunny", "source": "elpais"}],
        fieldnames=["title", "summary", "translated", "source"],
    )
    manifest = {
        "arabic": ["data/arabic_1.csv", "data/arabic_2.csv"],
        "spanish": ["data/spanish_1.csv"],
        "french": [],
        "russian": ["data/missing.csv"],
    }
    (tmp_path / "available_files.json").write_text(json.dumps(manifest), encoding="utf-8")
    return tmp_path


@pytest.fixture()
def manifest_path(dataset_dir: Path) -> str:
    return str(dataset_dir / "available_files.json")
