"""replaydict: record/replay response dictionary validator for load tests."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("replaydict")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
# Note: record and validate are exported from replaydict.api, not from root
from replaydict.api import DictionaryIssue, DictionaryReport, verify_dictionary
from replaydict.codes import IssueCode, OutcomeCode
from replaydict.config import ValidatorConfig
from replaydict.contracts import Message
from replaydict.validator import DictionaryValidator, ValidationOutcome

__all__ = [
    "__version__",
    "DictionaryIssue",
    "DictionaryReport",
    "DictionaryValidator",
    "IssueCode",
    "Message",
    "OutcomeCode",
    "ValidationOutcome",
    "ValidatorConfig",
    "verify_dictionary",
]
