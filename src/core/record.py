"""
Record value object - immutable, validated, JSON round-trippable.
Construction is the single validation gate; every other operation assumes a valid Record.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator, model_validator
from pydantic_core import PydanticSerializationError

from .config import debug_enabled, get_json_encoding, validation_logging_enabled
from util.logging import (
    logger,
    log_schema_validation_error,
    log_schema_validation_success,
    log_serialization_error,
    sanitize_payload,
)

# Validation context flag that lets the `ignored` field through the input filter
KEEP_IGNORED = "keep_ignored"

# Characters str.isspace() accepts that do not count as blank in an id
NON_BLANK_SPACES = frozenset("\u00a0\u2007\u202f\u0085")


def is_blank(value: str) -> bool:
    """True for an empty string or one made only of breaking whitespace."""
    return all(c.isspace() and c not in NON_BLANK_SPACES for c in value)


class Kind(str, Enum):
    """Closed classification of a record, serialized by name."""
    OTHER_THING = "OTHER_THING"
    SOME_THING = "SOME_THING"
    THAT_THING = "THAT_THING"
    THIS_THING = "THIS_THING"

    @classmethod
    def names(cls) -> List[str]:
        return [member.name for member in cls]

    @classmethod
    def lookup(cls, name: Any) -> Optional["Kind"]:
        """Case-sensitive lookup by member name; None when nothing matches."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            return None
        return cls.__members__.get(name)


class Record(BaseModel):
    """
    Immutable record with structural equality and hashing over all five fields.

    Build instances with `Record.of(...)` or one of the decode factories; they
    return None instead of raising. `ignored` lives only in memory: it is never
    written to JSON and never read back from it.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str = ""
    int_value: int = Field(0, alias="intValue")
    kind: Kind = Field(..., alias="typeOfThing")
    ignored: str = Field("", exclude=True)

    @model_validator(mode="before")
    @classmethod
    def drop_unrecognized_input(cls, data: Any, info: ValidationInfo) -> Any:
        if isinstance(data, dict) and "ignored" in data:
            if not (info.context and info.context.get(KEEP_IGNORED)):
                data = {k: v for k, v in data.items() if k != "ignored"}
        return data

    @field_validator('id', mode='before')
    @classmethod
    def id_must_not_be_blank(cls, v):
        if v is None or (isinstance(v, str) and is_blank(v)):
            raise ValueError('id cannot be blank')
        return v

    @field_validator('name', 'ignored', mode='before')
    @classmethod
    def null_string_becomes_empty(cls, v):
        return "" if v is None else v

    @field_validator('int_value', mode='before')
    @classmethod
    def null_int_becomes_zero(cls, v):
        return 0 if v is None else v

    @field_validator('kind', mode='before')
    @classmethod
    def kind_must_be_valid(cls, v):
        kind = Kind.lookup(v)
        if kind is None:
            raise ValueError(f'typeOfThing must be one of: {Kind.names()}')
        return kind

    @classmethod
    def model_construct(cls, _fields_set=None, **values):
        raise TypeError("Record cannot be built without validation; use Record.of or Record.model_validate")

    # Factories

    @classmethod
    def of(
        cls,
        id: Optional[str],
        name: Optional[str],
        int_value: int,
        kind: Union[str, Kind, None],
        ignored: Optional[str] = None,
    ) -> Optional["Record"]:
        """Validate the parts and build a Record, or return None if they are invalid."""
        raw = {"id": id, "name": name, "intValue": int_value, "typeOfThing": kind, "ignored": ignored}
        try:
            record = cls.model_validate(raw, context={KEEP_IGNORED: True})
        except ValidationError as e:
            _log_rejected("Record.of", e, raw)
            return None

        if debug_enabled():
            log_schema_validation_success("Record.of", record.id)
        return record

    @classmethod
    def of_record(cls, source: Optional["Record"]) -> Optional["Record"]:
        """Clone `source`; None in, None out."""
        if source is None:
            return None
        logger.log_record_operation("clone", source.id)
        return source.clone()

    @classmethod
    def from_json(cls, text: Optional[str]) -> Optional["Record"]:
        """Decode a JSON object, or return None on malformed or invalid input."""
        if text is None:
            return None
        return cls._decode("Record.from_json", text)

    @classmethod
    def from_bytes(cls, data: Optional[bytes]) -> Optional["Record"]:
        """Decode a JSON object held in bytes, or return None on malformed or invalid input."""
        if data is None:
            return None
        try:
            text = bytes(data).decode(get_json_encoding())
        except (UnicodeDecodeError, LookupError, TypeError) as e:
            log_serialization_error("Record.from_bytes", "", e)
            return None
        return cls._decode("Record.from_bytes", text)

    @classmethod
    def _decode(cls, operation: str, text: str) -> Optional["Record"]:
        try:
            record = cls.model_validate_json(text)
        except ValidationError as e:
            _log_rejected(operation, e)
            return None

        if debug_enabled():
            log_schema_validation_success(operation, record.id, source="json")
        return record

    # Instance operations

    def clone(self) -> "Record":
        return self.model_copy()

    def to_dict(self) -> Dict[str, Any]:
        """The wire mapping: id, name, intValue, typeOfThing."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> Optional[str]:
        try:
            return self.model_dump_json(by_alias=True)
        except PydanticSerializationError as e:
            log_serialization_error("Record.to_json", self.id, e)
            return None

    def to_bytes(self) -> Optional[bytes]:
        text = self.to_json()
        if text is None:
            return None
        try:
            return text.encode(get_json_encoding())
        except (UnicodeEncodeError, LookupError) as e:
            log_serialization_error("Record.to_bytes", self.id, e)
            return None


def _log_rejected(operation: str, error: ValidationError, source: Optional[Dict[str, Any]] = None):
    if validation_logging_enabled():
        log_schema_validation_error(
            operation,
            error.errors(include_url=False),
            sanitize_payload(source) if source else None,
        )
