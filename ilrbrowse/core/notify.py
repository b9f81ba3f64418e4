"""
User-facing notifications for ilrbrowse.
"""
import logging
import sys
from typing import TextIO

# Configure logging
logger = logging.getLogger(__name__)

INFO = "info"
SUCCESS = "success"
DANGER = "danger"
SEVERITIES = (INFO, SUCCESS, DANGER)


class Notifier:
    """
    Receives (message, severity) outcomes from the browser session.
    """
    def notify(self, message: str, severity: str = INFO) -> None:
        if severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {severity}")
        logger.debug(f"Notification [{severity}]: {message}")


class ConsoleNotifier(Notifier):
    """
    Prints notifications to a stream, tagged with their severity.
    """
    def __init__(self, stream: TextIO = None):
        self.stream = stream or sys.stderr

    def notify(self, message: str, severity: str = INFO) -> None:
        super().notify(message, severity)
        print(f"[{severity}] {message}", file=self.stream)
