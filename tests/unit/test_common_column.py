import pytest

from dfprop.config import TemporalMode
from dfprop.exceptions import ConfigShapeError
from dfprop.properties import CommonColumnProperties

COMMON_COLUMN_GROUP = {
    "commonColumnMap": {
        "REGISTER_DATETIME": "TIMESTAMP",
        "REGISTER_USER": "VARCHAR",
        "$-TABLE_NAME_UPDATE_USER": "VARCHAR",
    },
    "beforeInsertMap": {
        "REGISTER_DATETIME": "$$AccessContext$$.getAccessTimestampOnThread()",
        "REGISTER_USER": "$$AccessContext$$.getAccessUserOnThread()",
    },
    "beforeUpdateMap": {
        "$-TABLE_NAME_UPDATE_USER": "$$allcommon$$.UserHolder.get()",
        "REGISTER_USER": " ",
    },
}


@pytest.fixture
def common_column(make_tree):
    return CommonColumnProperties(
        make_tree(commonColumnMap=COMMON_COLUMN_GROUP),
        base_common_package="org.dbflute.allcommon",
        access_context_fqcn="org.dbflute.allcommon.AccessContext",
    )


class TestCommonColumns:
    def test_names_keep_order(self, common_column):
        assert common_column.common_column_names() == [
            "REGISTER_DATETIME",
            "REGISTER_USER",
            "$-TABLE_NAME_UPDATE_USER",
        ]

    def test_lookup_ignores_case(self, common_column):
        assert common_column.has_common_column()
        assert common_column.is_common_column("register_user")
        assert common_column.common_column_map["register_datetime"] == "TIMESTAMP"

    def test_conversion_names(self, common_column):
        assert common_column.common_column_conversion_names() == ["$-TABLE_NAME_UPDATE_USER"]
        assert common_column.filter_common_column("$-TABLE_NAME_UPDATE_USER") == (
            "TABLE_NAME_UPDATE_USER"
        )

    def test_convert_common_column_name(self, common_column):
        assert common_column.convert_common_column_name(
            "$-TABLE_NAME_UPDATE_USER", "MEMBER"
        ) == "MEMBER_UPDATE_USER"
        assert common_column.convert_common_column_name(
            "$-table_name_update_user", "member"
        ) == "member_update_user"
        assert common_column.convert_common_column_name("REGISTER_USER", "MEMBER") == (
            "REGISTER_USER"
        )

    def test_absent_group(self):
        common_column = CommonColumnProperties()
        assert not common_column.has_common_column()
        assert not common_column.is_existing_setup_element()


class TestSetupLogic:
    def test_access_context_is_expanded(self, common_column):
        assert common_column.find_before_insert_logic("REGISTER_DATETIME") == (
            "org.dbflute.allcommon.AccessContext.getAccessTimestampOnThread()"
        )

    def test_allcommon_is_expanded(self, common_column):
        assert common_column.find_before_update_logic("$-TABLE_NAME_UPDATE_USER") == (
            "org.dbflute.allcommon.UserHolder.get()"
        )

    def test_has_logic(self, common_column):
        assert common_column.has_before_insert_logic("register_user")
        assert not common_column.has_before_update_logic("REGISTER_USER")
        assert not common_column.has_before_update_logic("REGISTER_DATETIME")
        assert common_column.is_existing_setup_element()

    def test_joda_wraps_access_timestamp(self, make_tree):
        common_column = CommonColumnProperties(
            make_tree(commonColumnMap=COMMON_COLUMN_GROUP),
            temporal_mode=TemporalMode.JODA,
        )
        assert common_column.find_before_insert_logic("REGISTER_DATETIME") == (
            "org.joda.time.LocalDateTime.fromDateFields("
            "allcommon.AccessContext.getAccessTimestampOnThread())"
        )
        assert common_column.find_before_insert_logic("REGISTER_USER") == (
            "allcommon.AccessContext.getAccessUserOnThread()"
        )

    def test_joda_wraps_access_date(self):
        common_column = CommonColumnProperties(temporal_mode=TemporalMode.JODA)
        assert common_column.filter_setup_logic("$$AccessContext$$.getAccessDateOnThread()") == (
            "org.joda.time.LocalDate.fromDateFields(allcommon.AccessContext.getAccessDateOnThread())"
        )

    def test_invoking_logic(self):
        logic = "$entity.classifyDeleteFlgFalse()"
        assert CommonColumnProperties.is_invoking_logic(logic)
        assert CommonColumnProperties.remove_invoking_mark(logic) == (
            "entity.classifyDeleteFlgFalse();"
        )

    def test_invoking_logic_escaped_symbols(self):
        logic = "$if (x) $$StartBrace$$ y()$$Semicolon$$ $$EndBrace$$"
        assert CommonColumnProperties.remove_invoking_mark(logic) == "if (x) { y(); };"

    def test_plain_logic_is_not_invoking(self):
        assert not CommonColumnProperties.is_invoking_logic("entity.getRegisterUser()")


def test_logic_must_be_string(make_tree):
    with pytest.raises(ConfigShapeError) as exc_info:
        CommonColumnProperties(
            make_tree(commonColumnMap={"beforeInsertMap": {"REGISTER_USER": ["x"]}})
        )
    assert exc_info.value.path == ["beforeInsertMap", "REGISTER_USER"]
