"""Record/replay dictionary validator.

In record mode every (original, response) pair teaches the dictionary:
the response payload is written to a file named by its content hash and
an index line maps the original message's fingerprint to that hash. In
validate mode the fingerprint is looked up, the recorded response is read
back and compared to the observed one.

The public entry points never raise. Every failure becomes a
ValidationOutcome with a failing code, and is_valid() collapses that to a
boolean for the validator registry.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, computed_field

from replaydict.codes import OutcomeCode
from replaydict.config import ValidatorConfig
from replaydict.contracts import excerpt, payload_text
from replaydict.exceptions import (
    ConfigurationError,
    DictionaryError,
    DictionaryIOError,
    IndexExistsError,
    MissingEntryError,
)
from replaydict.kernel.hash_utils import response_identifier
from replaydict.kernel.index import DictionaryIndex, append_entry, fingerprint
from replaydict.kernel.store import read_response, response_path, write_response

logger = logging.getLogger(__name__)


class ValidationOutcome(BaseModel):
    """Result of a single check() call."""
    code: OutcomeCode
    fingerprint: Optional[str] = None
    response_id: Optional[str] = None
    path: Optional[str] = None  # response file or index file involved
    message: Optional[str] = None

    @computed_field
    @property
    def valid(self) -> bool:
        return self.code.passed

    def __bool__(self) -> bool:
        return self.valid


class DictionaryValidator:
    """Validates responses against a dictionary of recorded correct responses.

    Usage:
        validator = DictionaryValidator(dictionary_directory="/tmp/d", record=True)
        validator.is_valid(original, response)   # records

        validator = DictionaryValidator(dictionary_directory="/tmp/d")
        validator.is_valid(original, response)   # compares

    One lock per instance guards the first-call overwrite check, the index
    cache load and the record-mode write pair, so concurrent recording does
    not interleave index lines.
    """

    def __init__(self, config: Optional[ValidatorConfig] = None, **settings: Any):
        if config is not None and settings:
            raise TypeError("Pass either a ValidatorConfig or keyword settings, not both")
        self.config = config if config is not None else ValidatorConfig(**settings)
        self._lock = threading.Lock()
        self._index_checked = False
        self._blocked = False
        self._index: Optional[DictionaryIndex] = None

    @property
    def dictionary_directory(self) -> Optional[Path]:
        return self.config.dictionary_directory

    @property
    def dictionary_index(self) -> str:
        return self.config.dictionary_index

    @property
    def record(self) -> bool:
        return self.config.record

    @property
    def index_checked(self) -> bool:
        return self._index_checked

    @property
    def blocked(self) -> bool:
        """True once record mode refused to run over an existing index."""
        return self._blocked

    def is_valid(self, original: Any, response: Any) -> bool:
        """Validate one observed response. Never raises."""
        return self.check(original, response).valid

    def check(self, original: Any, response: Any) -> ValidationOutcome:
        """Validate one observed response and report why it passed or failed."""
        try:
            self._check_index_once()
            if self.config.record:
                return self._record_response(original, response)
            return self._validate_response(original, response)
        except IndexExistsError as e:
            return ValidationOutcome(
                code=OutcomeCode.INDEX_EXISTS,
                path=str(self.config.index_path),
                message=str(e),
            )
        except ConfigurationError as e:
            logger.error("Dictionary validator is not configured: %s", e)
            return ValidationOutcome(code=OutcomeCode.CONFIG_ERROR, message=str(e))
        except MissingEntryError as e:
            logger.error("Error validating response: %s", e)
            return ValidationOutcome(
                code=OutcomeCode.MISSING_ENTRY,
                fingerprint=e.fingerprint,
                path=str(self.config.index_path),
                message=str(e),
            )
        except DictionaryIOError as e:
            mode = "recording correct response" if self.config.record else "validating response"
            logger.error(
                "Error %s for message '%s': %s",
                mode,
                excerpt(payload_text(response)),
                e,
            )
            return ValidationOutcome(code=OutcomeCode.IO_ERROR, path=e.path, message=str(e))
        except DictionaryError as e:
            logger.error("Dictionary error: %s", e)
            return ValidationOutcome(code=OutcomeCode.IO_ERROR, message=str(e))

    def reload_index(self) -> None:
        """Drop the cached index so the next lookup reads it from disk again."""
        with self._lock:
            self._index = None

    def _directory(self) -> Path:
        directory = self.config.dictionary_directory
        if directory is None:
            raise ConfigurationError("dictionary_directory is not set")
        return directory

    def _index_path(self) -> Path:
        return self._directory() / self.config.dictionary_index

    def _check_index_once(self) -> None:
        if self._index_checked and not self._blocked:
            return
        with self._lock:
            if not self._index_checked:
                self._index_checked = True
                if self.config.record and self._index_path().exists():
                    self._blocked = True
                    logger.error(
                        "Error while trying to record responses - index file '%s' already exists, "
                        "overwrite not permitted.",
                        self._index_path(),
                    )
            elif self._blocked:
                logger.debug("Recording still refused, index file '%s' exists", self._index_path())
        if self._blocked:
            raise IndexExistsError(
                f"Index file '{self._index_path()}' already exists, overwrite not permitted"
            )

    def _record_response(self, original: Any, response: Any) -> ValidationOutcome:
        directory = self._directory()
        text = payload_text(response)
        response_id = response_identifier(text)
        key = fingerprint(payload_text(original))

        with self._lock:
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DictionaryIOError(
                    f"Cannot create dictionary directory '{directory}': {e}", directory
                ) from e
            # No rollback: a failed response write leaves the index line behind.
            append_entry(self._index_path(), key, response_id)
            path = write_response(directory, response_id, text)

        logger.debug("Recorded response %s for '%s'", response_id, excerpt(key))
        return ValidationOutcome(
            code=OutcomeCode.RECORDED,
            fingerprint=key,
            response_id=response_id,
            path=str(path),
        )

    def _get_index(self) -> DictionaryIndex:
        index = self._index
        if index is None:
            with self._lock:
                if self._index is None:
                    self._index = DictionaryIndex(self._index_path())
                index = self._index
        return index

    def _validate_response(self, original: Any, response: Any) -> ValidationOutcome:
        directory = self._directory()
        key = fingerprint(payload_text(original))
        response_id = self._get_index().get(key)
        if response_id is None:
            raise MissingEntryError(key)

        expected = read_response(directory, response_id)
        observed = payload_text(response)
        path = str(response_path(directory, response_id))

        if observed == expected:
            return ValidationOutcome(
                code=OutcomeCode.VALID,
                fingerprint=key,
                response_id=response_id,
                path=path,
            )

        logger.debug(
            "Response mismatch for '%s': expected '%s', got '%s'",
            excerpt(key),
            excerpt(expected),
            excerpt(observed),
        )
        return ValidationOutcome(
            code=OutcomeCode.MISMATCH,
            fingerprint=key,
            response_id=response_id,
            path=path,
            message="Response differs from the recorded one",
        )
