"""
Journal applicatif en mémoire.

LogBuffer est un handler `logging` qui conserve chaque entrée formatée
dans une liste, sans éviction, pour toute la durée du processus. Il est
créé au bootstrap et attaché au logger `logistics`.

Un verrou garantit qu'un seul écrivain ajoute à la fois et que les
lecteurs obtiennent une copie cohérente (un préfixe du journal).
"""

from __future__ import annotations

import logging
import threading

DEFAULT_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class LogBuffer(logging.Handler):
    def __init__(self, level: int = logging.NOTSET):
        super().__init__(level)
        self.setFormatter(logging.Formatter(DEFAULT_FORMAT, DEFAULT_DATEFMT))
        self._entries: list[str] = []
        self._entries_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = self.format(record)
        except Exception:
            self.handleError(record)
            return
        with self._entries_lock:
            self._entries.append(entry)

    def entries(self) -> list[str]:
        with self._entries_lock:
            return list(self._entries)

    def recent(self, count: int) -> list[str]:
        """Les `count` dernières entrées, de la plus ancienne à la plus récente."""
        if count <= 0:
            return []
        with self._entries_lock:
            return self._entries[-count:]

    def __len__(self) -> int:
        with self._entries_lock:
            return len(self._entries)


def attach(buffer: LogBuffer, logger_name: str = "logistics", level: str = "INFO") -> LogBuffer:
    """
    Attache le buffer au logger donné et règle son niveau.

    Un seul LogBuffer est attaché à la fois : un buffer précédent est retiré.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level.upper())
    for handler in list(logger.handlers):
        if isinstance(handler, LogBuffer) and handler is not buffer:
            logger.removeHandler(handler)
    if buffer not in logger.handlers:
        logger.addHandler(buffer)
    return buffer
