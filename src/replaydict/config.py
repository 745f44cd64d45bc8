"""Validator configuration model."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class ValidatorConfig(BaseModel):
    """Settings for a DictionaryValidator, fixed before first use.

    Accepts both snake_case field names and the camelCase keys used in
    scenario files (``dictionaryDirectory``, ``dictionaryIndex``, ``record``).
    """
    dictionary_directory: Optional[Path] = None  # required, checked on first operation
    dictionary_index: str = "index"
    record: bool = False

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @field_validator("dictionary_index")
    @classmethod
    def _bare_file_name(cls, value: str) -> str:
        if not value or value in (".", ".."):
            raise ValueError("dictionary_index must be a non-empty file name")
        if "/" in value or "\\" in value:
            raise ValueError(
                f"dictionary_index must be a bare file name, got '{value}'"
            )
        return value

    @property
    def index_path(self) -> Optional[Path]:
        if self.dictionary_directory is None:
            return None
        return self.dictionary_directory / self.dictionary_index
