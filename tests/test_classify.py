"""Tests for heuristic TAK message type detection."""

import pytest

from cot_proto import CotUnparsedDetail, Point, TakCotType, classify, detect_tak_cot_type, parse
from cot_proto.classify import DETAIL_RULES, TYPE_RULES
from cot_proto.examples import COT_BASE_EXAMPLE, COT_TRACK_EXAMPLE

GEOFENCE = '<__geofence elevationMonitored="false" minElevation="" monitor="All" trigger="Both" tracking="false" maxElevation="" boundingSphere="88.0"/>'
USERICON = '<usericon iconsetpath="COT_MAPPING_2525B/a-u/a-u-G"/>'
CONTACT = '<contact callsign="Alpha"/>'


def make_cot(cot_type: str, detail: list[str]) -> CotUnparsedDetail:
    return CotUnparsedDetail(
        version="2.0",
        uid="test-uid",
        type=cot_type,
        time="2024-05-01T10:00:00Z",
        start="2024-05-01T10:00:00Z",
        stale="2024-05-01T10:05:00Z",
        point=Point.north_pole(),
        detail=detail,
    )


class TestDetailRules:
    def test_marker(self):
        assert classify(make_cot("a-f-A-M-F-Q", [CONTACT, USERICON])) is TakCotType.MARKER

    def test_geofence_in_earlier_fragment_wins(self):
        assert classify(make_cot("a-f-G", [GEOFENCE, USERICON])) is TakCotType.GEOFENCE

    def test_earlier_fragment_wins_over_rule_order(self):
        # usericon is seen first, so the geofence rule never gets a chance
        assert classify(make_cot("a-f-G", [USERICON, GEOFENCE])) is TakCotType.MARKER

    def test_rule_order_within_one_fragment(self):
        both = '<shape><__geofence/><usericon iconsetpath="x"/></shape>'
        assert classify(make_cot("a-f-G", [both])) is TakCotType.GEOFENCE

    def test_detail_rules_checked_before_type(self):
        assert classify(make_cot("u-d-f-m", [USERICON])) is TakCotType.MARKER


class TestTypeRules:
    @pytest.mark.parametrize("cot_type, expected", [
        ("u-d-f-m", TakCotType.SHAPE),
        ("u-d-r", TakCotType.SHAPE),
        ("u-r-b-c-c", TakCotType.RANGE_BEARING),
        ("u-rb-a", TakCotType.RANGE_BEARING),
        ("b-m-r", TakCotType.ROUTE),
        ("a-h-A-M-F-U-M", TakCotType.OTHER),
    ])
    def test_type_string(self, cot_type, expected):
        assert classify(make_cot(cot_type, [CONTACT])) is expected

    def test_empty_detail_falls_through_to_type(self):
        assert classify(make_cot("u-d-c-c", [])) is TakCotType.SHAPE
        assert classify(make_cot("a-f-G", [])) is TakCotType.OTHER


def test_rule_tables_are_ordered():
    assert [needle for needle, _ in DETAIL_RULES] == ["__geofence", "usericon"]
    assert [needle for needle, _ in TYPE_RULES] == ["u-r-b-", "u-rb-", "b-m-r", "u-d-"]


def test_classify_is_pure():
    cot = make_cot("a-f-G", [CONTACT, USERICON])
    first = classify(cot)
    assert classify(cot) is first
    assert classify(make_cot("a-f-G", [CONTACT, USERICON])) is first
    assert cot.detail == [CONTACT, USERICON]


class TestDetect:
    def test_track_is_other(self):
        result = detect_tak_cot_type(COT_TRACK_EXAMPLE)
        assert result.cot_type is TakCotType.OTHER
        assert result.cot_msg == parse(COT_TRACK_EXAMPLE)

    def test_base_is_other(self):
        assert detect_tak_cot_type(COT_BASE_EXAMPLE).cot_type is TakCotType.OTHER

    def test_route_from_text(self):
        text = COT_BASE_EXAMPLE.replace("a-h-A-M-F-U-M", "b-m-r")
        result = detect_tak_cot_type(text)
        assert result.cot_type is TakCotType.ROUTE
        assert result.cot_msg.type == "b-m-r"
