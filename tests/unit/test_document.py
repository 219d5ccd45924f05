import pytest

from dfprop.exceptions import ConfigShapeError
from dfprop.properties import DocumentProperties
from dfprop.properties import document as document_module


def test_defaults():
    document = DocumentProperties(project_name="maihamadb")
    assert document.document_output_directory == "./output/doc"
    assert document.schema_html_file_name == "schema-maihamadb.html"
    assert document.history_html_file_name == "history-maihamadb.html"
    assert document.is_entity_java_doc_db_comment_valid() is True
    assert document.is_entity_db_meta_db_comment_valid() is False
    assert document.is_check_craft_diff() is True
    assert document.basic_craft_sql_dir == "./schema/craftdiff"
    assert not document.is_alias_delimiter_in_db_comment_valid()
    assert not document.is_load_data_reverse_valid()


def test_configured_values(make_tree):
    document = DocumentProperties(
        make_tree(
            documentDefinitionMap={
                "documentOutputDirectory": "./doc",
                "aliasDelimiterInDbComment": ":",
                "isDbCommentOnAliasBasis": "true",
                "schemaHtmlFileName": "schema.html",
                "isCheckColumnDefOrderDiff": "true",
                "coreCraftMetaDirPath": "$$DEFAULT$$/core",
                "loadDataReverseMap": {"isOverrideExistingDataFile": "true"},
            }
        ),
        project_name="maihamadb",
    )
    assert document.document_output_directory == "./doc"
    assert document.is_alias_delimiter_in_db_comment_valid()
    assert document.is_db_comment_on_alias_basis()
    assert document.schema_html_file_name == "schema.html"
    assert document.history_html_file_name == "history-maihamadb.html"
    assert document.is_check_column_def_order_diff()
    assert document.core_craft_meta_dir_path == "./schema/craftdiff/core"
    assert document.is_load_data_reverse_valid()
    assert document.is_load_data_reverse_override_existing_data_file()
    assert document.is_load_data_reverse_contains_common_column()


def test_null_alias_delimiter_is_invalid(make_tree):
    document = DocumentProperties(
        make_tree(documentDefinitionMap={"aliasDelimiterInDbComment": "null"})
    )
    assert not document.is_alias_delimiter_in_db_comment_valid()


@pytest.mark.parametrize("key", ["loadDataReverseMap", "schemaSyncCheckMap"])
def test_nested_maps_are_checked_on_build(make_tree, key):
    with pytest.raises(ConfigShapeError):
        DocumentProperties(make_tree(documentDefinitionMap={key: "x"}))


class TestSchemaSyncCheck:
    def test_disabled_without_user(self):
        document = DocumentProperties(database_url="jdbc:mysql://main")
        assert not document.is_schema_sync_check_valid()
        assert document.schema_sync_check_database_url == "jdbc:mysql://main"
        assert document.schema_sync_check_result_file_path == "./output/doc/sync-check-result.html"
        assert document.schema_sync_check_craft_meta_dir == "./output/doc/craftdiff"

    def test_configured_target(self, make_tree):
        document = DocumentProperties(
            make_tree(
                documentDefinitionMap={
                    "documentOutputDirectory": "./doc",
                    "schemaSyncCheckMap": {
                        "url": " jdbc:mysql://sync ",
                        "schema": "maihamadb",
                        "user": "sync_user",
                        "password": "sync-secret",
                        "isSuppressCraftDiff": "true",
                        "resultHtmlFileName": "sync.html",
                        "craftMetaDirPath": "$$DEFAULT$$/sync",
                    },
                }
            ),
            database_url="jdbc:mysql://main",
        )
        assert document.is_schema_sync_check_valid()
        assert document.schema_sync_check_database_url == "jdbc:mysql://sync"
        assert document.schema_sync_check_database_catalog is None
        assert document.schema_sync_check_database_schema == "maihamadb"
        assert document.schema_sync_check_database_user == "sync_user"
        assert document.schema_sync_check_database_password == "sync-secret"
        assert document.is_schema_sync_check_suppress_craft_diff()
        assert document.schema_sync_check_result_file_path == "./doc/sync.html"
        assert document.schema_sync_check_craft_meta_dir == "./doc/craftdiff/sync"

    def test_password_is_registered_as_secret(self, make_tree, monkeypatch):
        registered = []
        monkeypatch.setattr(document_module.logger, "register_secret", registered.append)
        DocumentProperties(
            make_tree(documentDefinitionMap={"schemaSyncCheckMap": {"password": "sync-secret"}})
        )
        assert registered == ["sync-secret"]

    def test_no_craft_meta_dir_when_craft_diff_is_off(self, make_tree):
        document = DocumentProperties(
            make_tree(documentDefinitionMap={"isCheckCraftDiff": "false"})
        )
        assert document.schema_sync_check_craft_meta_dir is None
