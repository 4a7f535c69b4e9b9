"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File removal for duplicate reconciliation.
Trash-based deletion goes through send2trash; permanent deletion unlinks.
Paths are used as traversed: a symbolic link is removed itself, never its target.
"""
import os
import logging
from typing import Callable
from send2trash import send2trash

from mediascanner.core.errors import DeletionError

logger = logging.getLogger(__name__)


class FileService:
    """
    Cross-platform file removal.
    Every failure is reported as DeletionError so callers handle one exception type.
    """

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file (or the link itself, for a symbolic link) to the system trash."""
        path = os.path.abspath(file_path)

        if not os.path.lexists(path):
            raise DeletionError(f"File not found: {path}")

        try:
            send2trash(path)
        except Exception as e:
            raise DeletionError(f"Failed to move to trash: {e}") from e
        logger.debug(f"Moved to trash: {path}")

    @staticmethod
    def delete_permanently(file_path: str):
        """Unlinks a file. There is no way back."""
        path = os.path.abspath(file_path)

        if not (os.path.islink(path) or os.path.isfile(path)):
            raise DeletionError(f"File not found: {path}")

        try:
            os.remove(path)
        except OSError as e:
            raise DeletionError(f"Failed to delete: {e.strerror or e}") from e
        logger.debug(f"Deleted: {path}")

    @classmethod
    def remover(cls, permanent: bool = False) -> Callable[[str], None]:
        """Returns the removal function matching the requested mode."""
        return cls.delete_permanently if permanent else cls.move_to_trash
