"""
Raw JSON codec for records and ordered sequences of records.
Unlike the Record convenience factories, decode failures here raise pydantic.ValidationError.
"""

import codecs
import logging
from typing import Iterable, List, Union

from pydantic import TypeAdapter, ValidationError

from .config import get_json_encoding
from .record import Record
from util.logging import logger

_RECORD_LIST = TypeAdapter(List[Record])


def _as_json_input(data: Union[str, bytes, bytearray]) -> Union[str, bytes]:
    if not isinstance(data, (bytes, bytearray)):
        return data

    encoding = get_json_encoding()
    if codecs.lookup(encoding).name == "utf-8":
        # pydantic reports invalid UTF-8 as json_invalid itself
        return bytes(data)
    try:
        return bytes(data).decode(encoding)
    except UnicodeDecodeError as e:
        raise ValidationError.from_exception_data(
            "json",
            [{"type": "json_invalid", "loc": (), "input": data, "ctx": {"error": str(e)}}],
        ) from e


def decode_record(data: Union[str, bytes, bytearray]) -> Record:
    """Decode one JSON object into a Record, raising ValidationError on any failure."""
    return Record.model_validate_json(_as_json_input(data))


def encode_records(records: Iterable[Record]) -> str:
    """Encode records as a JSON array of wire objects, preserving order."""
    items = list(records)
    for index, item in enumerate(items):
        if not isinstance(item, Record):
            raise TypeError(f"element {index} is {type(item).__name__}, expected Record")

    encoded = _RECORD_LIST.dump_json(items, by_alias=True).decode("utf-8")
    logger.log_operation("codec.encode_records", "success", {"count": len(items)}, level=logging.DEBUG)
    return encoded


def encode_records_bytes(records: Iterable[Record]) -> bytes:
    return encode_records(records).encode(get_json_encoding())


def decode_records(data: Union[str, bytes, bytearray]) -> List[Record]:
    """
    Decode a JSON array into records in document order.

    Every element goes through the same validation as a single record;
    any invalid element fails the whole decode with ValidationError.
    """
    records = _RECORD_LIST.validate_json(_as_json_input(data))
    logger.log_operation("codec.decode_records", "success", {"count": len(records)}, level=logging.DEBUG)
    return records
