"""
CoT event models.

Field aliases follow the XML mapping used by the codec: `@name` for an
attribute, a bare name for a child element and `$text` for character data.
Detail schemas supplied by callers should subclass `XmlModel` and follow the
same convention so they compose with the envelope.
"""

import types
from typing import Any, Generic, Optional, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cot_proto.models.timestamp import Timestamp

TEXT_KEY = "$text"
XMLNS_KEY = "$xmlns"
COT_VERSION = "2.0"


def _is_sequence(annotation: Any) -> bool:
    origin = get_origin(annotation)
    if origin in (list, tuple):
        return True
    if origin is Union or origin is types.UnionType:
        return any(_is_sequence(arg) for arg in get_args(annotation) if arg is not type(None))
    return False


class XmlModel(BaseModel):
    """Base model for anything decoded from a CoT XML element."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _from_xml_value(cls, data: Any) -> Any:
        # A bare element with no attributes decodes to its text.
        if isinstance(data, str):
            return {TEXT_KEY: data} if data else {}
        if isinstance(data, dict):
            for name, field in cls.model_fields.items():
                key = field.alias or name
                if key in data and _is_sequence(field.annotation) and not isinstance(data[key], list):
                    data = {**data, key: [data[key]]}
        return data


class Point(XmlModel):
    lat: float = Field(alias="@lat")
    lon: float = Field(alias="@lon")
    ce: float = Field(alias="@ce")     # circular error
    hae: float = Field(alias="@hae")   # height above ellipsoid
    le: float = Field(alias="@le")     # linear error

    @classmethod
    def north_pole(cls) -> "Point":
        return cls(lat=90.0, lon=0.0, ce=0.0, hae=0.0, le=0.0)


class Envelope(XmlModel):
    """The fixed part of a CoT `<event>`."""

    version: str = Field(alias="@version")
    uid: str = Field(alias="@uid")
    type: str = Field(alias="@type")
    time: Timestamp = Field(alias="@time")
    start: Timestamp = Field(alias="@start")
    stale: Timestamp = Field(alias="@stale")
    how: Optional[str] = Field(default=None, alias="@how")
    point: Point
    # Prefix declarations (`xmlns:x` -> URI) in scope for raw detail fragments.
    namespaces: dict[str, str] = Field(default_factory=dict, alias=XMLNS_KEY)


class NoDetail(XmlModel):
    """Detail placeholder for messages whose `<detail>` is ignored."""


DetailT = TypeVar("DetailT")


class Cot(Envelope, Generic[DetailT]):
    """An envelope plus its detail payload.

    `Cot[list[str]]` carries the raw detail fragments; `Cot[SomeXmlModel]`
    carries a typed detail decoded with the same attribute/element mapping
    as the envelope.
    """

    detail: DetailT


CotBase = Cot[NoDetail]
CotUnparsedDetail = Cot[list[str]]
