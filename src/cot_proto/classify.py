"""
Heuristic detection of TAK CoT message types.

There is no registry of TAK message shapes, so the type is guessed from
substrings seen in known example traffic. Rules are checked in order and the
first match wins: detail fragments first (each fragment against every detail
rule before moving to the next fragment), then the event `type` string.
Treat `TakCotType.OTHER` as "unclassified".
"""

import logging
from typing import Union

from cot_proto.codec.detail import parse
from cot_proto.models.base import CotUnparsedDetail
from cot_proto.models.classification import TakCotMessage, TakCotType

logger = logging.getLogger(__name__)

# Order matters.
DETAIL_RULES: tuple[tuple[str, TakCotType], ...] = (
    ("__geofence", TakCotType.GEOFENCE),
    ("usericon", TakCotType.MARKER),
)

TYPE_RULES: tuple[tuple[str, TakCotType], ...] = (
    ("u-r-b-", TakCotType.RANGE_BEARING),
    ("u-rb-", TakCotType.RANGE_BEARING),
    ("b-m-r", TakCotType.ROUTE),
    ("u-d-", TakCotType.SHAPE),
)


def classify(cot: CotUnparsedDetail) -> TakCotType:
    for fragment in cot.detail:
        for needle, cot_type in DETAIL_RULES:
            if needle in fragment:
                logger.debug(f"uid={cot.uid}: detail matched {needle!r} -> {cot_type.value}")
                return cot_type
    for needle, cot_type in TYPE_RULES:
        if needle in cot.type:
            logger.debug(f"uid={cot.uid}: type {cot.type!r} matched {needle!r} -> {cot_type.value}")
            return cot_type
    return TakCotType.OTHER


def detect_tak_cot_type(text: Union[str, bytes]) -> TakCotMessage:
    """Parse `text` and guess its TAK message type.

    Based on example messages from the ATAK repository; expect misses on
    producers that were never sampled.
    """
    cot = parse(text)
    return TakCotMessage(cot_type=classify(cot), cot_msg=cot)
