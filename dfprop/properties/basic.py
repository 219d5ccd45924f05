"""Project-wide settings: ``basicInfoMap``."""

from dfprop.config import BasicInfo
from dfprop.exceptions import UnknownDefinitionError
from dfprop.language import LanguageTypeMapping, get_language_type_mapping
from dfprop.properties.base import AbstractProperties

SUPPORTED_CONTAINERS = ("seasar", "spring", "lucy", "guice", "slim3", "cdi")
DEFAULT_BASE_COMMON_PACKAGE = "allcommon"


def filter_package_base(package: str, package_base: str, middle_base: str) -> str:
    """Prefix a simple package: ``[packageBase].[middleBase].[package]``, blanks skipped."""
    parts = [base for base in (package_base, middle_base) if base.strip()]
    return ".".join(parts + [package])


class BasicProperties(AbstractProperties):
    """
    Basic information of the project.

    ``project`` and ``database`` are required. The target language decides the
    default type mapping handed to ``TypeMappingProperties``.

    Example:
    ```
    map:{
        ; project = maihamadb
        ; database = mysql
        ; targetLanguage = java
        ; targetContainer = spring
        ; packageBase = org.docksidestage.dbflute
    }
    ```
    """

    group_name = "basicInfoMap"

    def _build(self) -> None:
        get = self.accessor.get_string
        mapping = self.mapping
        package_base = get(mapping, "packageBase", "")
        base_class_package = get(mapping, "baseClassPackage", "")
        base_common_package = filter_package_base(
            get(mapping, "baseCommonPackage", DEFAULT_BASE_COMMON_PACKAGE),
            package_base,
            base_class_package,
        )

        target_container = get(mapping, "targetContainer", "seasar")
        if target_container.lower() not in SUPPORTED_CONTAINERS:
            raise UnknownDefinitionError(
                "target container",
                target_container,
                option="targetContainer",
                available=list(SUPPORTED_CONTAINERS),
            )

        self.info = BasicInfo(
            project=self.accessor.require_string(mapping, "project"),
            database=self.accessor.require_string(mapping, "database"),
            target_language=get(mapping, "targetLanguage", "java"),
            target_container=target_container,
            package_base=package_base,
            base_class_package=base_class_package,
            extended_class_package=get(mapping, "extendedClassPackage", ""),
            base_common_package=base_common_package,
            generate_output_directory=get(
                mapping, "generateOutputDirectory", "../src/main/java"
            ),
            resource_output_directory=get(mapping, "resourceOutputDirectory"),
            source_file_encoding=get(mapping, "sourceFileEncoding", "UTF-8"),
            project_prefix=get(mapping, "projectPrefix", ""),
            class_author=get(mapping, "classAuthor", "DBFlute(AutoGenerator)"),
            table_name_camel_case=self._camel_case_flag(
                "isTableNameCamelCase", "isJavaNameOfTableSameAsDbName"
            ),
            column_name_camel_case=self._camel_case_flag(
                "isColumnNameCamelCase", "isJavaNameOfColumnSameAsDbName"
            ),
        )
        self.language_type_mapping = get_language_type_mapping(self.info.target_language)

    def _camel_case_flag(self, key: str, old_style_key: str) -> bool:
        if self.accessor.get_boolean(self.mapping, key):
            return True
        return self.accessor.get_boolean(self.mapping, old_style_key)

    @property
    def project_name(self) -> str:
        return self.info.project

    @property
    def target_database(self) -> str:
        return self.info.database

    @property
    def target_language(self) -> str:
        return self.info.target_language

    def is_target_container(self, name: str) -> bool:
        return self.info.target_container.strip().lower() == name.lower()

    @property
    def access_context_fqcn(self) -> str:
        return self.info.access_context_fqcn

    def get_language_type_mapping(self) -> LanguageTypeMapping:
        return self.language_type_mapping
