import pytest

from dfprop.config import NotNullNuance
from dfprop.exceptions import ConfigShapeError, DomainInvariantError
from dfprop.properties import AdditionalNotNullProperties


@pytest.fixture
def not_null(make_tree):
    return AdditionalNotNullProperties(
        make_tree(
            additionalNotNullMap={
                "$$ALL$$": {"columnMap": {"REGISTER_USER": {"nuance": "business"}}},
                "MEMBER": {
                    "columnMap": {
                        "BIRTHDATE": {"nuance": "Maybe"},
                        "REGISTER_USER": {"nuance": "maybe"},
                    }
                },
                "PURCHASE": {},
            }
        )
    )


def test_table_names_exclude_all_marker(not_null):
    assert not_null.table_names() == ["MEMBER", "PURCHASE"]


def test_nuance_ignores_case(not_null):
    assert not_null.find_nuance("member", "birthdate") is NotNullNuance.MAYBE
    assert not_null.is_column_not_null_maybe("MEMBER", "BIRTHDATE")
    assert not not_null.is_column_not_null_business("MEMBER", "BIRTHDATE")


def test_all_tables_apply_to_every_table(not_null):
    assert not_null.find_nuance("PURCHASE", "REGISTER_USER") is NotNullNuance.BUSINESS
    assert not_null.find_nuance("PRODUCT", "REGISTER_USER") is NotNullNuance.BUSINESS
    assert not_null.is_column_not_null_business("PRODUCT", "REGISTER_USER")


def test_table_definition_comes_first(not_null):
    assert not_null.find_nuance("MEMBER", "REGISTER_USER") is NotNullNuance.MAYBE


def test_predicates_also_consult_all_tables(not_null):
    assert not_null.is_column_not_null_maybe("MEMBER", "REGISTER_USER")
    assert not_null.is_column_not_null_business("MEMBER", "REGISTER_USER")


def test_unknown_column(not_null):
    assert not_null.find_nuance("MEMBER", "MEMBER_NAME") is None


def test_missing_nuance(make_tree):
    with pytest.raises(DomainInvariantError, match="Not found the nuance") as exc_info:
        AdditionalNotNullProperties(
            make_tree(additionalNotNullMap={"MEMBER": {"columnMap": {"BIRTHDATE": {}}}})
        )
    assert "BIRTHDATE" in str(exc_info.value)


def test_wrong_nuance(make_tree):
    with pytest.raises(DomainInvariantError, match="Wrong expression"):
        AdditionalNotNullProperties(
            make_tree(
                additionalNotNullMap={
                    "MEMBER": {"columnMap": {"BIRTHDATE": {"nuance": "always"}}}
                }
            )
        )


def test_column_element_must_be_mapping(make_tree):
    with pytest.raises(ConfigShapeError) as exc_info:
        AdditionalNotNullProperties(
            make_tree(additionalNotNullMap={"MEMBER": {"columnMap": {"BIRTHDATE": "business"}}})
        )
    assert exc_info.value.path == ["MEMBER", "columnMap", "BIRTHDATE"]


@pytest.mark.parametrize("column_map", [[], "x"])
def test_column_map_must_be_mapping(make_tree, column_map):
    with pytest.raises(ConfigShapeError) as exc_info:
        AdditionalNotNullProperties(
            make_tree(additionalNotNullMap={"MEMBER": {"columnMap": column_map}})
        )
    assert exc_info.value.path == ["MEMBER", "columnMap"]


def test_absent_column_map_is_empty(make_tree):
    not_null = AdditionalNotNullProperties(
        make_tree(additionalNotNullMap={"MEMBER": {"columnMap": None}})
    )
    assert dict(not_null.additional_not_null_map["MEMBER"]) == {}
