"""Tests for converter data models."""

from vehicle_tables.ingest.models import (
    Category,
    CombinedResult,
    Component,
    FrameValue,
    IDENTITY_ORIENTATION,
    Metadata,
    ParsedDocument,
    VectorValue,
    serialize_value,
)


class TestFrameValue:
    def test_defaults(self):
        frame = FrameValue()
        assert frame.position == [0.0, 0.0, 0.0]
        assert frame.orientation == IDENTITY_ORIENTATION

    def test_default_orientation_is_a_copy(self):
        frame = FrameValue()
        frame.orientation[0] = 9.0
        assert IDENTITY_ORIENTATION[0] == 1.0

    def test_from_no_args(self):
        assert FrameValue.from_args([]) == FrameValue()

    def test_to_dict(self):
        assert FrameValue.from_args([1.0, 2.0, 3.0]).to_dict() == {
            "position": [1.0, 2.0, 3.0],
            "orientation": IDENTITY_ORIENTATION,
        }


class TestSerializeValue:
    def test_nested(self):
        value = {
            "V": VectorValue(kind="Vector2", components=[1.0, 2.0]),
            "Shells": {"AP": {"Name": "AP", "Live": True}},
            "N": 3.0,
        }
        assert serialize_value(value) == {
            "V": {"kind": "Vector2", "components": [1.0, 2.0]},
            "Shells": {"AP": {"Name": "AP", "Live": True}},
            "N": 3.0,
        }


class TestCategory:
    def test_plural(self):
        assert [c.plural for c in Category] == ["guns", "turrets", "hulls"]


class TestParsedDocument:
    def test_add_routes_by_category(self):
        doc = ParsedDocument()
        doc.add(Component(name="G", id="1", category=Category.GUN))
        doc.add(Component(name="H", id="2", category=Category.HULL))
        assert list(doc.guns) == ["G"]
        assert list(doc.hulls) == ["H"]
        assert doc.count() == 2
        assert [c.name for c in doc.components()] == ["G", "H"]

    def test_component_to_dict_omits_absent_optionals(self):
        comp = Component(name="T", id="5", metadata=Metadata(crew=[]))
        assert comp.to_dict() == {
            "id": "5",
            "metadata": {"attributes": {}, "config": {}, "crew": []},
        }


class TestCombinedResult:
    def test_count_recomputed(self):
        result = CombinedResult()
        assert result.count == {"guns": 0, "turrets": 0, "hulls": 0, "total": 0}
        result.guns["A"] = Component(name="A", id="1", category=Category.GUN)
        result.guns["A"] = Component(name="A", id="2", category=Category.GUN)
        assert result.count["total"] == 1
