"""
JSON file session store.

Client-local persistence of the one current session record, the
command-line counterpart of browser local storage.
"""

import json
import os
from pathlib import Path
from typing import Optional

from huissier.domain.repositories.i_session_store import ISessionStore
from huissier.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class FileSessionStore(ISessionStore):
    """
    Session slot stored as a single JSON file.

    Writes go through a temporary file and an atomic rename so a crash
    never leaves a half-written record behind. The file is created with
    owner-only permissions since it holds a reusable credential.
    """

    def __init__(self, path: str):
        """
        Initialize store.

        Args:
            path: Session file location (``~`` is expanded)
        """
        self.path = Path(path).expanduser()

    def load(self) -> Optional[dict]:
        if not self.path.exists():
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                record = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read session file {self.path}: {e}")
            return None

        if not isinstance(record, dict):
            logger.warning(f"Ignoring malformed session file {self.path}")
            return None

        return record

    def save(self, record: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(record, f)

        os.replace(tmp_path, self.path)

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
