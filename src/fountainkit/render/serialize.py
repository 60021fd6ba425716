"""Structured serialization of Fountain documents to JSON and YAML."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from fountainkit.config import get_logger
from fountainkit.exceptions import SerializationError
from fountainkit.parser.fountain_models import Document, Element, ElementType

logger = get_logger(__name__)


class SerializationFormat(str, Enum):
    """Supported structured formats."""

    JSON = "json"
    YAML = "yaml"


class ElementRecord(BaseModel):
    """Serialized element: ``{type, name?, content}``."""

    model_config = ConfigDict(extra="forbid")

    type: int | str
    name: str | None = None
    content: str = ""


class DocumentRecord(BaseModel):
    """Serialized document: title page entries and body elements."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title_page: list[ElementRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("title_page", "titlePage", "TitlePage"),
    )
    elements: list[ElementRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("elements", "Elements"),
    )


def _element_record(element: Element, type_names: bool) -> ElementRecord:
    return ElementRecord(
        type=element.type.type_name if type_names else int(element.type),
        name=element.name,
        content=element.content,
    )


def to_record(document: Document, type_names: bool = False) -> DocumentRecord:
    """Build the serializable record for a document.

    Args:
        document: Document to convert
        type_names: Emit CamelCase type names instead of integer tags
    """
    return DocumentRecord(
        title_page=[_element_record(e, type_names) for e in document.title_page],
        elements=[_element_record(e, type_names) for e in document.elements],
    )


def _element_type(value: int | str) -> ElementType:
    try:
        if isinstance(value, int):
            return ElementType(value)
        if value.strip().isdigit():
            return ElementType(int(value))
        return ElementType.from_name(value)
    except ValueError as e:
        raise SerializationError(
            message=f"Unknown element type: {value!r}",
            hint="Use an integer type tag or a name such as 'SceneHeading'.",
            details={"type": value},
        ) from e


def from_record(record: DocumentRecord) -> Document:
    """Rebuild a Document from its record.

    Raises:
        SerializationError: If a type tag is unknown or a title page entry
            has a non title page type
    """
    title_page = []
    for entry in record.title_page:
        entry_type = _element_type(entry.type)
        if entry_type is not ElementType.TITLE_PAGE:
            raise SerializationError(
                message="Title page entries must have the TitlePage type",
                details={"type": entry.type, "name": entry.name},
            )
        title_page.append(
            Element(type=entry_type, content=entry.content, name=entry.name)
        )

    elements = [
        Element(type=_element_type(entry.type), content=entry.content, name=entry.name)
        for entry in record.elements
    ]
    return Document(title_page=tuple(title_page), elements=tuple(elements))


def _format(fmt: SerializationFormat | str) -> SerializationFormat:
    if isinstance(fmt, SerializationFormat):
        return fmt
    try:
        return SerializationFormat(str(fmt).lower())
    except ValueError as e:
        raise SerializationError(
            message=f"Unsupported serialization format: {fmt}",
            hint="Use 'json' or 'yaml'.",
            details={"format": str(fmt)},
        ) from e


def dumps(
    document: Document,
    fmt: SerializationFormat | str = SerializationFormat.JSON,
    pretty: bool = False,
    type_names: bool = False,
) -> str:
    """Serialize a document.

    Args:
        document: Document to serialize, left untouched on failure
        fmt: ``json`` or ``yaml``
        pretty: Indented JSON / block style YAML instead of the compact forms
        type_names: Emit CamelCase type names instead of integer tags

    Returns:
        The encoded document

    Raises:
        SerializationError: If encoding fails
    """
    target = _format(fmt)
    data = to_record(document, type_names=type_names).model_dump(exclude_none=True)

    try:
        if target is SerializationFormat.YAML:
            return yaml.safe_dump(
                data,
                default_flow_style=not pretty,
                sort_keys=False,
                allow_unicode=True,
                width=float("inf"),
            )
        if pretty:
            return json.dumps(data, indent=2, ensure_ascii=False)
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError, yaml.YAMLError) as e:
        raise SerializationError(
            message=f"Failed to encode document as {target.value}",
            details={"error": str(e)},
        ) from e


def _decode(data: str | bytes, target: SerializationFormat) -> Any:
    if isinstance(data, bytes):
        data = data.decode("utf-8-sig")
    if target is SerializationFormat.YAML:
        return yaml.safe_load(data)
    return json.loads(data)


def loads(
    data: str | bytes, fmt: SerializationFormat | str = SerializationFormat.JSON
) -> Document:
    """Deserialize a document produced by ``dumps``.

    Raises:
        SerializationError: If the data cannot be decoded or does not have
            the document record shape
    """
    target = _format(fmt)
    try:
        raw = _decode(data, target)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise SerializationError(
            message=f"Failed to decode {target.value} document",
            hint="Check that the input was produced by 'fountainkit export'.",
            details={"error": str(e)},
        ) from e

    try:
        record = DocumentRecord.model_validate(raw)
    except ValidationError as e:
        raise SerializationError(
            message="Data does not describe a Fountain document",
            details={"errors": e.error_count(), "error": str(e).splitlines()[0]},
        ) from e

    document = from_record(record)
    logger.debug(
        "Loaded document",
        format=target.value,
        title_page_entries=len(document.title_page),
        elements=len(document.elements),
    )
    return document
