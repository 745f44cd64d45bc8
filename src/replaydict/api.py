"""Public API for replaydict.

High-level functions that return complete, structured results.
Harness code should use these functions or DictionaryValidator instead
of importing from kernel modules.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from pydantic import BaseModel

from replaydict.codes import IssueCode
from replaydict.config import ValidatorConfig
from replaydict.exceptions import DictionaryIOError
from replaydict.kernel.hash_utils import is_response_identifier, response_identifier
from replaydict.kernel.index import iter_entries, read_index, unescape_key
from replaydict.kernel.store import read_response
from replaydict.validator import DictionaryValidator, ValidationOutcome

PathLike = Union[str, os.PathLike, Path]


def _normalize_path(path: PathLike) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


class DictionaryIssue(BaseModel):
    """A single dictionary verification issue (error or warning)."""
    code: str  # IssueCode value
    message: str
    line: Optional[int] = None  # index line number, for MALFORMED_LINE and DUPLICATE_KEY
    fingerprint: Optional[str] = None  # unescaped original payload text
    response_id: Optional[str] = None


class DictionaryReport(BaseModel):
    """Result of verify_dictionary()."""
    ok: bool  # True if no errors (warnings don't block)
    directory: str
    index: str
    entries: int
    errors: List[DictionaryIssue]
    warnings: List[DictionaryIssue]


def record(
    directory: PathLike,
    original: Any,
    response: Any,
    index: str = "index",
) -> ValidationOutcome:
    """Record a single correct response into a dictionary.

    The overwrite guard applies, so this fails with INDEX_EXISTS once the
    dictionary already has an index. Use DictionaryValidator directly to
    record a whole run.
    """
    validator = DictionaryValidator(
        ValidatorConfig(dictionary_directory=_normalize_path(directory), dictionary_index=index, record=True)
    )
    return validator.check(original, response)


def validate(
    directory: PathLike,
    original: Any,
    response: Any,
    index: str = "index",
) -> ValidationOutcome:
    """Validate a single response against a recorded dictionary."""
    validator = DictionaryValidator(
        ValidatorConfig(dictionary_directory=_normalize_path(directory), dictionary_index=index)
    )
    return validator.check(original, response)


def load_index(directory: PathLike, index: str = "index") -> Dict[str, str]:
    """Load a dictionary index as original payload text -> response identifier.

    Raises:
        DictionaryIOError: If the index file cannot be read
    """
    entries = read_index(_normalize_path(directory) / index)
    return {unescape_key(key): response_id for key, response_id in entries.items()}


def verify_dictionary(directory: PathLike, index: str = "index") -> DictionaryReport:
    """Check that a dictionary directory is consistent.

    Errors: missing index, malformed index lines (no separator or a value
    that is not a response identifier), index entries without a
    response file, response files whose content no longer hashes to their
    name. Warnings: repeated keys, response files no entry refers to.
    """
    directory_path = _normalize_path(directory)
    index_path = directory_path / index
    errors: List[DictionaryIssue] = []
    warnings: List[DictionaryIssue] = []

    def _report(ok: bool, entries: int) -> DictionaryReport:
        return DictionaryReport(
            ok=ok,
            directory=str(directory_path),
            index=index,
            entries=entries,
            errors=sorted(errors, key=_sort_key),
            warnings=sorted(warnings, key=_sort_key),
        )

    try:
        text = index_path.read_text(encoding="utf-8", errors="replace")
    except (OSError, UnicodeError) as e:
        errors.append(DictionaryIssue(
            code=IssueCode.INDEX_NOT_FOUND.value,
            message=f"Cannot read index file '{index_path}': {e}",
        ))
        return _report(False, 0)

    entries: Dict[str, str] = {}
    for lineno, line, entry in iter_entries(text):
        if entry is None:
            errors.append(DictionaryIssue(
                code=IssueCode.MALFORMED_LINE.value,
                message=f"Index line {lineno} has no '=' separator",
                line=lineno,
            ))
            continue
        key, response_id = entry
        if not is_response_identifier(response_id):
            errors.append(DictionaryIssue(
                code=IssueCode.MALFORMED_LINE.value,
                message=f"Index line {lineno} has an invalid response identifier",
                line=lineno,
                fingerprint=unescape_key(key),
            ))
            continue
        if key in entries:
            warnings.append(DictionaryIssue(
                code=IssueCode.DUPLICATE_KEY.value,
                message=f"Index line {lineno} repeats an earlier key; the last entry wins",
                line=lineno,
                fingerprint=unescape_key(key),
                response_id=response_id,
            ))
        entries[key] = response_id

    checked: Set[str] = set()
    for key, response_id in entries.items():
        if response_id in checked:
            continue
        checked.add(response_id)
        try:
            content = read_response(directory_path, response_id)
        except DictionaryIOError:
            errors.append(DictionaryIssue(
                code=IssueCode.RESPONSE_NOT_FOUND.value,
                message=f"Response file '{response_id}' is missing",
                fingerprint=unescape_key(key),
                response_id=response_id,
            ))
            continue
        if response_identifier(content) != response_id:
            errors.append(DictionaryIssue(
                code=IssueCode.HASH_MISMATCH.value,
                message=f"Response file '{response_id}' content does not match its name",
                fingerprint=unescape_key(key),
                response_id=response_id,
            ))

    referenced = set(entries.values())
    for child in directory_path.iterdir():
        if child.is_file() and is_response_identifier(child.name) and child.name not in referenced:
            warnings.append(DictionaryIssue(
                code=IssueCode.ORPHAN_RESPONSE.value,
                message=f"Response file '{child.name}' is not referenced by the index",
                response_id=child.name,
            ))

    return _report(len(errors) == 0, len(entries))


def _sort_key(issue: DictionaryIssue) -> tuple:
    return (
        issue.code,
        issue.line or 0,
        issue.response_id or "",
        issue.fingerprint or "",
    )


__all__ = [
    "DictionaryIssue",
    "DictionaryIOError",
    "DictionaryReport",
    "load_index",
    "record",
    "validate",
    "verify_dictionary",
]
