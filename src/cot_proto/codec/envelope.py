"""
Envelope encoding and decoding.

XML is mapped to plain dicts before validation: attribute `x` becomes key
`@x`, child element `x` becomes key `x` (a list when the tag repeats), and
character data becomes `$text`. An element with neither attributes nor
children maps to its text. The same mapping is used for typed detail
schemas, which is what lets them sit inside the envelope unchanged.
"""

import logging
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Any, NoReturn, TypeVar, Union

from pydantic import BaseModel, ValidationError

from cot_proto.codec.tokenizer import namespace_declarations, prepare_source
from cot_proto.errors import (
    InvalidFieldError,
    MalformedTimestampError,
    MissingFieldError,
    TokenizationError,
)
from cot_proto.models.base import TEXT_KEY, XMLNS_KEY, Cot, Envelope
from cot_proto.models.timestamp import format_timestamp

logger = logging.getLogger(__name__)

D = TypeVar("D")

_EVENT_END = "</event>"


def element_to_dict(element: ET.Element) -> Any:
    data: dict[str, Any] = {f"@{name}": value for name, value in element.attrib.items()}
    repeated: set[str] = set()
    for child in element:
        value = element_to_dict(child)
        if child.tag not in data:
            data[child.tag] = value
        elif child.tag in repeated:
            data[child.tag].append(value)
        else:
            data[child.tag] = [data[child.tag], value]
            repeated.add(child.tag)
    text = (element.text or "").strip()
    if not data:
        return text
    if text:
        data[TEXT_KEY] = text
    return data


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_timestamp(value)
    return str(value)


def fill_element(element: ET.Element, value: Any) -> ET.Element:
    """Inverse of `element_to_dict`: write a dumped model into `element`."""
    if isinstance(value, dict):
        for key, item in value.items():
            if key.startswith("@"):
                element.set(key[1:], _to_text(item))
            elif key == TEXT_KEY:
                element.text = _to_text(item)
            elif isinstance(item, (list, tuple)):
                for entry in item:
                    fill_element(ET.SubElement(element, key), entry)
            else:
                fill_element(ET.SubElement(element, key), item)
    elif value is not None:
        element.text = _to_text(value)
    return element


def parse_event_element(text: Union[str, bytes]) -> ET.Element:
    try:
        root = ET.fromstring(prepare_source(text))
    except ET.ParseError as err:
        line, column = err.position
        raise TokenizationError(f"malformed XML: {err}", {"line": line, "column": column}) from err
    if root.tag != "event":
        raise InvalidFieldError("event", f"expected root element 'event', got '{root.tag}'")
    return root


def raise_for_validation(err: ValidationError) -> NoReturn:
    """Re-raise the first pydantic error as a cot-proto `ParseError`."""
    first = err.errors()[0]
    field = ".".join(str(part).lstrip("@") for part in first["loc"] if not isinstance(part, int)) or "event"
    if first["type"] == "missing":
        raise MissingFieldError(field) from err
    if first["type"] == "malformed_timestamp":
        raise MalformedTimestampError(str(first.get("input", "")), field) from err
    raise InvalidFieldError(field, f"invalid value for '{field}': {first['msg']}") from err


def _event_data(root: ET.Element, text: Union[str, bytes]) -> dict[str, Any]:
    data = element_to_dict(root)
    data = data if isinstance(data, dict) else {}
    # ElementTree drops xmlns attributes; raw fragments may depend on them.
    namespaces = namespace_declarations(text)
    if namespaces:
        data[XMLNS_KEY] = namespaces
    return data


def decode(text: Union[str, bytes]) -> Envelope:
    """Decode the envelope of a CoT event; `<detail>` content is ignored."""
    data = _event_data(parse_event_element(text), text)
    try:
        envelope = Envelope.model_validate(data)
    except ValidationError as err:
        raise_for_validation(err)
    if "detail" not in data:
        raise MissingFieldError("detail")
    logger.debug(f"decoded envelope uid={envelope.uid} type={envelope.type}")
    return envelope


def decode_typed(text: Union[str, bytes], detail_type: type[D]) -> Cot[D]:
    """Decode a whole event with `<detail>` validated against `detail_type`.

    Use this when the detail shape is known in advance, e.g. after
    classifying the message.
    """
    data = _event_data(parse_event_element(text), text)
    try:
        return Cot[detail_type].model_validate(data)  # type: ignore[valid-type]
    except ValidationError as err:
        raise_for_validation(err)


def encode(envelope: Envelope) -> str:
    """Serialize an envelope, with whatever detail it carries, to XML text.

    Raw detail fragments are written back exactly as they were captured.
    """
    data = envelope.model_dump(by_alias=True, exclude_none=True, exclude={"detail", "namespaces"})
    root = fill_element(ET.Element("event"), data)
    for name, uri in envelope.namespaces.items():
        root.set(name, uri)
    payload = getattr(envelope, "detail", None)
    if isinstance(payload, (list, tuple)):
        # point is required, so the event always serializes with an end tag
        text = ET.tostring(root, encoding="unicode")
        return f"{text[:-len(_EVENT_END)]}<detail>{''.join(payload)}</detail>{_EVENT_END}"
    detail = ET.SubElement(root, "detail")
    if isinstance(payload, BaseModel):
        fill_element(detail, payload.model_dump(by_alias=True, exclude_none=True))
    elif isinstance(payload, dict):
        fill_element(detail, payload)
    return ET.tostring(root, encoding="unicode")
