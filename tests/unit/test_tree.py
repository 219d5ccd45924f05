"""Unit tests for the property value tree."""

import pytest

from dfprop.exceptions import ConfigShapeError
from dfprop.tree import (
    ABSENT,
    AbsentNode,
    MappingNode,
    PropertyGroup,
    SequenceNode,
    StringNode,
    from_python,
    node_kind,
    to_python,
)


class TestFromPython:
    def test_scalars_become_string_nodes(self):
        assert from_python("abc") == StringNode("abc")

    def test_none_becomes_absent(self):
        assert from_python(None) is ABSENT

    def test_nested_structure(self):
        node = from_python({"a": {"b": ["x", None]}})
        assert isinstance(node, MappingNode)
        inner = node.get("a")
        assert isinstance(inner, MappingNode)
        items = inner.get("b")
        assert isinstance(items, SequenceNode)
        assert items.items == (StringNode("x"), ABSENT)

    def test_mapping_keeps_insertion_order(self):
        node = from_python({"z": "1", "a": "2", "m": "3"})
        assert node.keys() == ["z", "a", "m"]

    def test_existing_node_is_returned_unchanged(self):
        node = StringNode("x")
        assert from_python(node) is node

    def test_non_text_scalar_is_rejected_with_path(self):
        with pytest.raises(ConfigShapeError) as exc_info:
            from_python({"basicInfoMap": {"project": 123}}, subject="properties")
        assert exc_info.value.path == ["basicInfoMap", "project"]
        assert exc_info.value.actual_type == "int"
        assert "Group: properties" in str(exc_info.value)

    def test_to_python_is_inverse(self):
        data = {"a": "1", "b": ["x", "y"], "c": {"d": None}}
        assert to_python(from_python(data)) == data


class TestNodes:
    def test_absent_is_falsy_singleton(self):
        assert not ABSENT
        assert AbsentNode() is ABSENT

    def test_mapping_get_missing_is_absent(self):
        assert MappingNode().get("missing") is ABSENT

    @pytest.mark.parametrize(
        "value,expected",
        [
            (StringNode("x"), "String"),
            (MappingNode(), "Mapping"),
            (SequenceNode(), "Sequence"),
            (ABSENT, "Absent"),
            (None, "Absent"),
            (12, "int"),
        ],
    )
    def test_node_kind(self, value, expected):
        assert node_kind(value) == expected


class TestPropertyGroup:
    def test_missing_group_is_empty_mapping(self):
        group = PropertyGroup.of(from_python({"other": {}}), "basicInfoMap")
        assert group.root is ABSENT
        assert len(group.mapping) == 0

    def test_absent_document(self):
        assert len(PropertyGroup.of(ABSENT, "basicInfoMap").mapping) == 0

    def test_group_must_be_mapping(self):
        group = PropertyGroup.of(from_python({"basicInfoMap": "text"}), "basicInfoMap")
        with pytest.raises(ConfigShapeError, match="should be a Mapping"):
            group.mapping

    def test_document_root_must_be_mapping(self):
        with pytest.raises(ConfigShapeError, match="document root"):
            PropertyGroup.of(StringNode("x"), "basicInfoMap")
