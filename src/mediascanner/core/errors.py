"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exceptions raised by the scanner, hasher and deletion services.

Only InvalidRootError is meant to abort a scan. The others are raised at the
point of failure and absorbed by the caller one level up, which records the
failure (missing fingerprint, empty children, skipped deletion) and moves on.
"""


class MediaScannerError(Exception):
    """Base class for all mediascanner errors."""


class TraversalError(MediaScannerError, RuntimeError):
    """A directory could not be traversed."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"{path}: {reason}" if reason else path
        super().__init__(message)


class InvalidRootError(TraversalError):
    """The scan root does not exist, is not a directory, or cannot be listed."""


class DirectoryUnrecursableError(TraversalError):
    """A child directory could not be listed."""


class FileUnreadableError(MediaScannerError, OSError):
    """A file's content could not be read for fingerprinting."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}" if reason else f"Cannot read {path}")


class DeletionError(MediaScannerError, RuntimeError):
    """A file selected for removal could not be removed."""
