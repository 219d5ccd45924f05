import pytest

from dfprop.accessor import TypedAccessor, derive_boolean_another_key, split_slash_list
from dfprop.exceptions import ConfigShapeError, MissingRequiredError
from dfprop.tree import SequenceNode, from_python


@pytest.fixture
def accessor():
    return TypedAccessor("basicInfoMap")


class TestSplitSlashList:
    def test_splits_tokens(self):
        assert split_slash_list("a/b/c") == ["a", "b", "c"]

    def test_single_token(self):
        assert split_slash_list("MEMBER_ID") == ["MEMBER_ID"]

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank_is_none(self, text):
        assert split_slash_list(text) is None

    def test_empty_tokens_are_skipped(self):
        assert split_slash_list("a//b/") == ["a", "b"]


class TestRequireString:
    def test_trimmed_value(self, accessor):
        mapping = from_python({"project": "  maihamadb  "})
        assert accessor.require_string(mapping, "project") == "maihamadb"

    @pytest.mark.parametrize("data", [{}, {"project": "   "}, {"project": None}])
    def test_absent_or_blank_is_missing(self, accessor, data):
        with pytest.raises(MissingRequiredError) as exc_info:
            accessor.require_string(from_python(data), "project")
        assert exc_info.value.key == "project"
        assert "The property 'project' is required." in str(exc_info.value)

    def test_wrong_type_is_shape_error_not_missing(self, accessor):
        mapping = from_python({"project": ["a"]})
        with pytest.raises(ConfigShapeError) as exc_info:
            accessor.require_string(mapping, "project")
        assert not isinstance(exc_info.value, MissingRequiredError)
        assert exc_info.value.actual_type == "Sequence"
        assert exc_info.value.expected_type == "String"


class TestGetString:
    def test_default_when_blank(self, accessor):
        mapping = from_python({"targetLanguage": " "})
        assert accessor.get_string(mapping, "targetLanguage", "java") == "java"

    def test_default_when_absent(self, accessor):
        assert accessor.get_string(from_python({}), "targetLanguage") is None

    def test_mapping_value_is_rejected(self, accessor):
        mapping = from_python({"targetLanguage": {"a": "b"}})
        with pytest.raises(ConfigShapeError, match="String"):
            accessor.get_string(mapping, "targetLanguage")


class TestGetBoolean:
    @pytest.mark.parametrize("raw", ["true", "TRUE", " True "])
    def test_true_spellings(self, accessor, raw):
        assert accessor.get_boolean(from_python({"isPretty": raw}), "isPretty") is True

    def test_false_keeps_true_default(self, accessor):
        mapping = from_python({"isPretty": "false"})
        assert accessor.get_boolean(mapping, "isPretty", default=True) is True

    def test_other_text_keeps_default(self, accessor):
        mapping = from_python({"isPretty": "yes"})
        assert accessor.get_boolean(mapping, "isPretty") is False

    def test_absent_uses_default(self, accessor):
        assert accessor.get_boolean(from_python({}), "isPretty", default=True) is True

    def test_alternate_key_without_is_prefix(self, accessor):
        mapping = from_python({"pretty": "true"})
        assert accessor.get_boolean(mapping, "isPretty") is True

    def test_primary_key_wins_over_alternate(self, accessor):
        mapping = from_python({"isPretty": "false", "pretty": "true"})
        assert accessor.get_boolean(mapping, "isPretty") is False

    @pytest.mark.parametrize(
        "key,expected",
        [("isPretty", "pretty"), ("isA", "a"), ("island", None), ("is", None), ("pretty", None)],
    )
    def test_derive_another_key(self, key, expected):
        assert derive_boolean_another_key(key) == expected


class TestNestedValues:
    def test_get_map_absent_is_empty(self, accessor):
        assert len(accessor.get_map(from_python({}), "variousMap")) == 0

    def test_get_map_wrong_type(self, accessor):
        with pytest.raises(ConfigShapeError, match="Mapping"):
            accessor.get_map(from_python({"variousMap": "x"}), "variousMap")

    def test_get_list_absent_is_empty(self, accessor):
        assert accessor.get_list(from_python({}), "tableExceptList") == SequenceNode()

    def test_get_list_wrong_type(self, accessor):
        with pytest.raises(ConfigShapeError, match="Sequence"):
            accessor.get_list(from_python({"tableExceptList": "x"}), "tableExceptList")

    def test_get_string_list_skips_blank(self, accessor):
        mapping = from_python({"names": [" A ", "", None, "B"]})
        assert accessor.get_string_list(mapping, "names") == ["A", "B"]

    def test_get_string_list_rejects_nested(self, accessor):
        mapping = from_python({"names": ["A", {"x": "y"}]})
        with pytest.raises(ConfigShapeError) as exc_info:
            accessor.get_string_list(mapping, "names")
        assert exc_info.value.path == ["names", "[1]"]

    def test_get_slash_list(self, accessor):
        mapping = from_python({"columnName": "A/B"})
        assert accessor.get_slash_list(mapping, "columnName") == ["A", "B"]


class TestValidateTwoLevel:
    def test_valid_definitions(self):
        accessor = TypedAccessor("additionalForeignKeyMap")
        mapping = from_python(
            {
                "FK_A": {"localTableName": "MEMBER", "comment": None},
                "FK_B": {"localTableName": "PURCHASE"},
            }
        )
        result = accessor.validate_two_level(mapping)
        assert list(result) == ["FK_A", "FK_B"]
        assert result["FK_A"] == {"localTableName": "MEMBER"}

    def test_top_level_value_must_be_mapping(self):
        accessor = TypedAccessor("additionalForeignKeyMap")
        with pytest.raises(ConfigShapeError) as exc_info:
            accessor.validate_two_level(from_python({"FK_A": "MEMBER"}))
        error = exc_info.value
        assert error.subject == "additionalForeignKeyMap"
        assert error.path == ["FK_A"]
        assert error.actual_type == "String"
        assert error.actual_value == "MEMBER"

    def test_inner_value_must_be_string(self):
        accessor = TypedAccessor("additionalForeignKeyMap")
        mapping = from_python({"FK_A": {"localColumnName": ["A", "B"]}})
        with pytest.raises(ConfigShapeError) as exc_info:
            accessor.validate_two_level(mapping)
        assert exc_info.value.path == ["FK_A", "localColumnName"]
        assert "Key: FK_A > localColumnName" in str(exc_info.value)
        assert "Actual Type: Sequence" in str(exc_info.value)

    def test_inner_key_must_be_string(self):
        accessor = TypedAccessor("additionalForeignKeyMap")
        mapping = from_python({"FK_A": {1: "x"}})
        with pytest.raises(ConfigShapeError, match="key type should be String"):
            accessor.validate_two_level(mapping)
