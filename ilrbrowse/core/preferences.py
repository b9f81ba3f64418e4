"""
Persisted user preferences for ilrbrowse.
"""
import json
import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)


class Preferences:
    """
    Stores the dark-mode flag in a small JSON file.
    """
    def __init__(self, path: str):
        self.path = Path(path).expanduser()

    def _read(self) -> Dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)

    @property
    def dark_mode(self) -> bool:
        return self._read().get('dark_mode') is True

    @dark_mode.setter
    def dark_mode(self, enabled: bool) -> None:
        data = self._read()
        data['dark_mode'] = bool(enabled)
        self._write(data)

    def toggle_dark_mode(self) -> bool:
        """
        Flip the dark-mode flag and persist it.
        
        Returns:
            The new value
        """
        self.dark_mode = not self.dark_mode
        return self.dark_mode
