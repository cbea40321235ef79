"""
Raw `<detail>` extraction and the hybrid parser.

The detail section has no fixed schema across producers, so it is kept as
the verbatim source text of each top-level child element, in document order
and with repeated tags preserved. Callers who know the shape can decode it
with `cot_proto.codec.envelope.decode_typed` instead.
"""

import logging
from typing import Optional, Union

from cot_proto.codec.envelope import decode
from cot_proto.codec.tokenizer import XmlEventKind, XmlTokenizer
from cot_proto.models.base import CotUnparsedDetail, Envelope

logger = logging.getLogger(__name__)

DETAIL_TAG = "detail"


def extract_detail(text: Union[str, bytes]) -> list[str]:
    """Return the top-level children of `<detail>` as source fragments.

    Children with nested content are captured whole, from their start tag
    through their end tag. If several `<detail>` elements appear at the depth
    of the first one, their children are concatenated in order.
    """
    tokens = XmlTokenizer(text)
    detail: list[str] = []
    detail_depth: Optional[int] = None
    inside = False
    child_begin = -1

    for event in tokens:
        if not inside:
            if event.kind is XmlEventKind.START and event.name == DETAIL_TAG:
                if detail_depth is None:
                    detail_depth = event.depth
                inside = event.depth == detail_depth
            continue
        if event.kind is XmlEventKind.END and event.depth == detail_depth:
            inside = False
            continue
        if event.depth != detail_depth + 1:
            continue
        if event.kind is XmlEventKind.EMPTY:
            detail.append(event.raw)
        elif event.kind is XmlEventKind.START:
            child_begin = event.begin
        elif event.kind is XmlEventKind.END:
            detail.append(tokens.slice(child_begin, event.end))
    return detail


def to_unparsed(envelope: Envelope, detail: Optional[list[str]] = None) -> CotUnparsedDetail:
    """Copy the envelope fields into a raw-detail message.

    Any typed detail on `envelope` is dropped, not converted to fragments.
    """
    fields = {name: getattr(envelope, name) for name in Envelope.model_fields}
    fields["point"] = envelope.point.model_copy()
    fields["namespaces"] = dict(envelope.namespaces)
    return CotUnparsedDetail(**fields, detail=list(detail or []))


def parse(text: Union[str, bytes]) -> CotUnparsedDetail:
    """Parse a CoT message, keeping `<detail>` as raw fragments.

    The text is read twice: once for the detail fragments and once for the
    envelope. An error from either pass is raised as is.
    """
    detail = extract_detail(text)
    cot = to_unparsed(decode(text), detail)
    logger.debug(f"parsed event uid={cot.uid} with {len(detail)} detail fragment(s)")
    return cot
