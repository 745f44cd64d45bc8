"""
Exception hierarchy for dictionary operations.

These are raised by the kernel helpers and translated into
ValidationOutcome codes at the DictionaryValidator boundary.
"""

from pathlib import Path
from typing import Optional, Union

from replaydict.contracts import excerpt


class DictionaryError(Exception):
    """Base exception for all dictionary-related errors."""

    pass


class ConfigurationError(DictionaryError):
    """Raised when the dictionary directory or index name is not usable."""

    pass


class IndexExistsError(DictionaryError):
    """
    Raised when record mode starts against an index that already exists.

    The index is never overwritten automatically; it has to be removed
    manually before a fresh recording session.
    """

    pass


class MissingEntryError(DictionaryError):
    """Raised when a fingerprint has no entry in the index."""

    def __init__(self, fingerprint: str):
        self.fingerprint = fingerprint
        super().__init__(f"No index entry for fingerprint '{excerpt(fingerprint)}'")


class DictionaryIOError(DictionaryError):
    """
    Raised when reading or writing a dictionary file fails.

    Keeps the target path so the failure can be diagnosed from the log.
    """

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = str(path) if path is not None else None
        super().__init__(message)
