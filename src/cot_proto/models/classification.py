"""
Message categories inferred for TAK CoT traffic.
"""

from enum import Enum

from pydantic import BaseModel

from cot_proto.models.base import CotUnparsedDetail


class TakCotType(str, Enum):
    GEOFENCE = "GeoFence"
    MARKER = "Marker"
    RANGE_BEARING = "RangeBearing"
    ROUTE = "Route"
    SHAPE = "Shape"
    OTHER = "Other"  # unclassified, not "confirmed generic"


class TakCotMessage(BaseModel):
    """A parsed message with its detected category.

    The `<detail>` section stays as raw fragments; callers pick a typed detail
    schema from `cot_type` and decode it themselves.
    """

    cot_type: TakCotType
    cot_msg: CotUnparsedDetail
