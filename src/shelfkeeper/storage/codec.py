"""Versioned encoding of record collections.

Stored collections are wrapped in an envelope so a reader can tell which
program wrote them, which collection they belong to, and which record
schema they follow::

    {
      "format": "shelfkeeper",
      "schema_version": 1,
      "collection": "books",
      "records": [...]
    }
"""

import json
from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import BaseModel, ValidationError

from .base import CodecError, RecordT

FORMAT_NAME = "shelfkeeper"
SCHEMA_VERSION = 1


class Envelope(BaseModel):
    """Outer structure of an encoded collection."""

    format: str
    schema_version: int
    collection: str
    records: list[Any]


def encode(collection: str, records: Sequence[BaseModel], pretty: bool = True) -> str:
    """Encode a collection to JSON text.

    Args:
        collection: Collection name stored in the envelope
        records: Records to encode, in order
        pretty: Indent the output

    Returns:
        JSON text
    """
    envelope = Envelope(
        format=FORMAT_NAME,
        schema_version=SCHEMA_VERSION,
        collection=collection,
        records=[record.model_dump(mode="json") for record in records],
    )
    return json.dumps(
        envelope.model_dump(mode="json"),
        indent=2 if pretty else None,
        ensure_ascii=False,
    )


def decode(collection: str, text: str, schema: type[RecordT]) -> list[RecordT]:
    """Decode JSON text written by :func:`encode`.

    Args:
        collection: Collection name the caller expects
        text: Encoded collection
        schema: Record model

    Returns:
        Decoded records in stored order

    Raises:
        CodecError: If the text is not a readable collection of ``schema`` records
    """
    try:
        envelope = Envelope.model_validate_json(text)
    except ValidationError as e:
        raise CodecError(f"Not a valid collection envelope: {e.error_count()} error(s)") from e

    if envelope.format != FORMAT_NAME:
        raise CodecError(f"Unknown format: {envelope.format!r}")
    check_version(envelope.schema_version)
    if envelope.collection != collection:
        raise CodecError(
            f"Collection mismatch: expected {collection!r}, found {envelope.collection!r}"
        )

    return [_validate(raw, schema) for raw in envelope.records]


def check_version(version: int) -> None:
    """Raise CodecError unless ``version`` is the supported schema version."""
    if version != SCHEMA_VERSION:
        raise CodecError(f"Unsupported schema version: {version}")


def dump_record(record: BaseModel) -> str:
    """Encode a single record as compact JSON."""
    return record.model_dump_json()


def load_records(payloads: Iterable[str], schema: type[RecordT]) -> list[RecordT]:
    """Decode records produced by :func:`dump_record`.

    Raises:
        CodecError: If any payload does not validate against ``schema``
    """
    records = []
    for payload in payloads:
        try:
            records.append(schema.model_validate_json(payload, strict=True))
        except ValidationError as e:
            raise CodecError(f"Invalid {schema.__name__} payload") from e
    return records


def _validate(raw: Any, schema: type[RecordT]) -> RecordT:
    try:
        return schema.model_validate(raw, strict=True)
    except ValidationError as e:
        raise CodecError(f"Invalid {schema.__name__} record") from e
