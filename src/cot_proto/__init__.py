"""
cot-proto — Cursor on Target (CoT) message codec for Python.

Typed access to the CoT event envelope, verbatim capture of the free-form
<detail> section, and heuristic detection of TAK message types.
"""

from cot_proto.classify import classify, detect_tak_cot_type
from cot_proto.codec.detail import extract_detail, parse, to_unparsed
from cot_proto.codec.envelope import decode, decode_typed, encode
from cot_proto.codec.tokenizer import XmlEvent, XmlEventKind, XmlTokenizer, first_element_attr, read_event_type
from cot_proto.errors import (
    CotError,
    InvalidFieldError,
    MalformedTimestampError,
    MissingFieldError,
    ParseError,
    TokenizationError,
)
from cot_proto.models.base import COT_VERSION, Cot, CotBase, CotUnparsedDetail, Envelope, NoDetail, Point, XmlModel
from cot_proto.models.classification import TakCotMessage, TakCotType
from cot_proto.models.timestamp import Timestamp, format_timestamp, parse_timestamp

__version__ = "0.1.0"
__all__ = [
    "classify",
    "detect_tak_cot_type",
    "extract_detail",
    "parse",
    "to_unparsed",
    "decode",
    "decode_typed",
    "encode",
    "XmlEvent",
    "XmlEventKind",
    "XmlTokenizer",
    "first_element_attr",
    "read_event_type",
    "CotError",
    "ParseError",
    "TokenizationError",
    "MissingFieldError",
    "MalformedTimestampError",
    "InvalidFieldError",
    "COT_VERSION",
    "Cot",
    "CotBase",
    "CotUnparsedDetail",
    "Envelope",
    "NoDetail",
    "Point",
    "XmlModel",
    "TakCotMessage",
    "TakCotType",
    "Timestamp",
    "format_timestamp",
    "parse_timestamp",
]
