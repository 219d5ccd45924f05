"""Schema document settings: ``documentDefinitionMap``."""

from typing import Optional

from dfprop.properties.base import AbstractProperties
from dfprop.tree import ABSENT, MappingNode, ValueNode
from dfprop.utils.logging import logger

DEFAULT_DOCUMENT_OUTPUT_DIRECTORY = "./output/doc"
DEFAULT_MARK = "$$DEFAULT$$"
BASIC_CRAFT_DIFF_DIR = "./schema/craftdiff"
SCHEMA_SYNC_CHECK_RESULT_FILE_NAME = "sync-check-result.html"
KEY_SCHEMA_SYNC_CHECK_MAP = "schemaSyncCheckMap"


class DocumentProperties(AbstractProperties):
    """
    Output settings of the schema and history HTML documents.

    Example:
    ```
    map:{
        ; documentOutputDirectory = ./output/doc
        ; aliasDelimiterInDbComment = :
        ; isEntityJavaDocDbCommentValid = true
        ; schemaHtmlFileName = schema.html
    }
    ```
    """

    group_name = "documentDefinitionMap"

    def __init__(self, tree: ValueNode = ABSENT, project_name: str = "", database_url: str = ""):
        self.project_name = project_name
        self.database_url = database_url
        super().__init__(tree)

    def _build(self) -> None:
        # nested maps are shape-checked once up front
        self.accessor.get_map(self.mapping, "loadDataReverseMap")
        sync_check_map = self.accessor.get_map(self.mapping, KEY_SCHEMA_SYNC_CHECK_MAP)
        password = self.accessor.get_string(sync_check_map, "password")
        if password:
            logger.register_secret(password)

    def _get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.accessor.get_string(self.mapping, key, default)

    def _is(self, key: str, default: bool = False) -> bool:
        return self.accessor.get_boolean(self.mapping, key, default)

    @property
    def document_output_directory(self) -> str:
        return self._get("documentOutputDirectory", DEFAULT_DOCUMENT_OUTPUT_DIRECTORY)

    @property
    def alias_delimiter_in_db_comment(self) -> Optional[str]:
        return self._get("aliasDelimiterInDbComment")

    def is_alias_delimiter_in_db_comment_valid(self) -> bool:
        delimiter = self.alias_delimiter_in_db_comment
        return delimiter is not None and delimiter.lower() != "null"

    def is_db_comment_on_alias_basis(self) -> bool:
        return self._is("isDbCommentOnAliasBasis")

    def is_entity_java_doc_db_comment_valid(self) -> bool:
        return self._is("isEntityJavaDocDbCommentValid", True)

    def is_entity_db_meta_db_comment_valid(self) -> bool:
        return self._is("isEntityDBMetaDbCommentValid")

    # ------------------------------------------------------------------
    # SchemaHTML / HistoryHTML
    # ------------------------------------------------------------------
    @property
    def schema_html_file_name(self) -> str:
        return self._get("schemaHtmlFileName", f"schema-{self.project_name}.html")

    @property
    def history_html_file_name(self) -> str:
        return self._get("historyHtmlFileName", f"history-{self.project_name}.html")

    def is_suppress_schema_html_outside_sql(self) -> bool:
        return self._is("isSuppressSchemaHtmlOutsideSql")

    def is_suppress_schema_html_procedure(self) -> bool:
        return self._is("isSuppressSchemaHtmlProcedure")

    def is_check_column_def_order_diff(self) -> bool:
        return self._is("isCheckColumnDefOrderDiff")

    def is_check_db_comment_diff(self) -> bool:
        return self._is("isCheckDbCommentDiff")

    def is_check_procedure_diff(self) -> bool:
        return self._is("isCheckProcedureDiff")

    def is_check_craft_diff(self) -> bool:
        return self._is("isCheckCraftDiff", True)

    @property
    def basic_craft_sql_dir(self) -> str:
        return self._get("basicCraftSqlDir", BASIC_CRAFT_DIFF_DIR)

    @property
    def core_craft_meta_dir_path(self) -> str:
        """Craft meta directory; ``$$DEFAULT$$`` expands to the basic craft directory."""
        path = self._get("coreCraftMetaDirPath", BASIC_CRAFT_DIFF_DIR)
        return path.replace(DEFAULT_MARK, BASIC_CRAFT_DIFF_DIR)

    # ------------------------------------------------------------------
    # LoadDataReverse
    # ------------------------------------------------------------------
    @property
    def load_data_reverse_map(self) -> MappingNode:
        return self.accessor.get_map(self.mapping, "loadDataReverseMap")

    def is_load_data_reverse_valid(self) -> bool:
        return len(self.load_data_reverse_map) > 0

    def is_load_data_reverse_contains_common_column(self) -> bool:
        return self.accessor.get_boolean(self.load_data_reverse_map, "isContainsCommonColumn", True)

    def is_load_data_reverse_override_existing_data_file(self) -> bool:
        return self.accessor.get_boolean(self.load_data_reverse_map, "isOverrideExistingDataFile")

    # ------------------------------------------------------------------
    # SchemaSyncCheck
    # ------------------------------------------------------------------
    @property
    def schema_sync_check_map(self) -> MappingNode:
        return self.accessor.get_map(self.mapping, KEY_SCHEMA_SYNC_CHECK_MAP)

    def _sync_check(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.accessor.get_string(self.schema_sync_check_map, key, default)

    def is_schema_sync_check_valid(self) -> bool:
        return self.schema_sync_check_database_user is not None

    @property
    def schema_sync_check_database_url(self) -> str:
        """Target URL; the main database URL when not set."""
        return self._sync_check("url", self.database_url)

    @property
    def schema_sync_check_database_catalog(self) -> Optional[str]:
        return self._sync_check("catalog")

    @property
    def schema_sync_check_database_schema(self) -> Optional[str]:
        return self._sync_check("schema")

    @property
    def schema_sync_check_database_user(self) -> Optional[str]:
        return self._sync_check("user")

    @property
    def schema_sync_check_database_password(self) -> str:
        return self._sync_check("password", "")

    def is_schema_sync_check_suppress_craft_diff(self) -> bool:
        return self.accessor.get_boolean(self.schema_sync_check_map, "isSuppressCraftDiff")

    @property
    def schema_sync_check_result_file_name(self) -> str:
        return self._sync_check("resultHtmlFileName", SCHEMA_SYNC_CHECK_RESULT_FILE_NAME)

    @property
    def schema_sync_check_result_file_path(self) -> str:
        return f"{self.document_output_directory}/{self.schema_sync_check_result_file_name}"

    @property
    def schema_sync_check_craft_meta_dir(self) -> Optional[str]:
        """Craft meta directory of the sync check, None when craft diff is off."""
        if not self.is_check_craft_diff():
            return None
        default_dir = f"{self.document_output_directory}/craftdiff"
        path = self._sync_check("craftMetaDirPath", default_dir)
        return path.replace(DEFAULT_MARK, default_dir)
