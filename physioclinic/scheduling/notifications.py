"""User-facing notifications raised by the scheduling view"""

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier for headless use; messages go to the log"""

    def success(self, message: str) -> None:
        logger.info(f"✅ {message}")

    def error(self, message: str) -> None:
        logger.error(f"❌ {message}")
