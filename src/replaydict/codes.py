"""Outcome code constants for DictionaryValidator.check().

These constants prevent stringly-typed outcome kinds and let callers
tell a genuine mismatch apart from an I/O failure.
"""

from enum import Enum


class OutcomeCode(str, Enum):
    """Validation outcome codes."""

    # Passing
    VALID = "VALID"
    RECORDED = "RECORDED"

    # Failing: comparison
    MISMATCH = "MISMATCH"
    MISSING_ENTRY = "MISSING_ENTRY"

    # Failing: dictionary state
    INDEX_EXISTS = "INDEX_EXISTS"
    IO_ERROR = "IO_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"

    @property
    def passed(self) -> bool:
        return self in (OutcomeCode.VALID, OutcomeCode.RECORDED)


class IssueCode(str, Enum):
    """Dictionary verification issue codes."""

    # Errors (blocking)
    INDEX_NOT_FOUND = "INDEX_NOT_FOUND"
    MALFORMED_LINE = "MALFORMED_LINE"
    RESPONSE_NOT_FOUND = "RESPONSE_NOT_FOUND"
    HASH_MISMATCH = "HASH_MISMATCH"

    # Warnings (non-blocking)
    ORPHAN_RESPONSE = "ORPHAN_RESPONSE"
    DUPLICATE_KEY = "DUPLICATE_KEY"
