"""Configuration models for dfprop.

Resolved property groups hand their results to the generator as these frozen
models; the enums select behavior that other groups depend on.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TemporalMode(str, Enum):
    """Temporal library used for DATE/TIMESTAMP/TIME native types."""

    NONE = "none"
    JAVA8 = "java8"
    JODA = "joda"


class NotNullNuance(str, Enum):
    """Meaning of an additional not-null definition."""

    BUSINESS = "business"  # not null in practice though nullable in DDL
    MAYBE = "maybe"  # possibly not null, documentation only


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LoggingConfig(BaseModel):
    """
    Logging configuration.

    Example:
    ```yaml
    logging:
      level: DEBUG
      structured: true
    ```
    """

    level: LogLevel = LogLevel.INFO
    structured: bool = Field(default=False, description="Output JSON logs")


class BasicInfo(BaseModel):
    """
    Resolved ``basicInfoMap``.

    Example:
    ```yaml
    basicInfoMap:
      project: maihamadb
      database: mysql
      targetLanguage: java
      targetContainer: spring
      packageBase: org.docksidestage.dbflute
    ```
    """

    model_config = ConfigDict(frozen=True)

    project: str
    database: str
    target_language: str = "java"
    target_container: str = "seasar"
    package_base: str = ""
    base_class_package: str = ""
    extended_class_package: str = ""
    base_common_package: str = "allcommon"
    generate_output_directory: str = "../src/main/java"
    resource_output_directory: Optional[str] = None
    source_file_encoding: str = "UTF-8"
    project_prefix: str = ""
    class_author: str = "DBFlute(AutoGenerator)"
    table_name_camel_case: bool = False
    column_name_camel_case: bool = False

    @property
    def access_context_fqcn(self) -> str:
        return f"{self.base_common_package}.{self.project_prefix}AccessContext"


class DatabaseInfo(BaseModel):
    """Resolved ``databaseInfoMap``; the password is kept out of ``repr``."""

    model_config = ConfigDict(frozen=True)

    driver: str
    url: str
    catalog: Optional[str] = None
    schema_name: Optional[str] = None
    user: Optional[str] = None
    password: str = Field(default="", repr=False)
    object_type_target_list: List[str] = Field(default_factory=lambda: ["TABLE", "VIEW"])
    table_except_list: List[str] = Field(default_factory=list)
    table_except_gen_only_list: List[str] = Field(default_factory=list)
    table_target_list: List[str] = Field(default_factory=list)


class AdditionalForeignKeyDef(BaseModel):
    """
    One virtual foreign key from ``additionalForeignKeyMap``.

    Example:
    ```
    FK_MEMBER_LOGIN_LATEST = map:{
        ; localTableName = MEMBER ; foreignTableName = MEMBER_LOGIN
        ; localColumnName = MEMBER_ID ; foreignColumnName = MEMBER_ID
        ; fixedCondition = $$foreignAlias$$.LOGIN_DATETIME = ...
        ; fixedSuffix = AsLatest
    }
    ```
    """

    model_config = ConfigDict(frozen=True)

    name: str
    local_table: Optional[str] = None
    foreign_table: Optional[str] = None
    local_columns: Optional[List[str]] = None
    foreign_columns: Optional[List[str]] = None
    fixed_condition: Optional[str] = None
    fixed_suffix: Optional[str] = None
    fixed_inline: bool = False
    fixed_referrer: bool = False
    fixed_only_join: bool = False
    suppress_join: bool = False
    suppress_subquery: bool = False
    comment: Optional[str] = None
    deprecated: Optional[str] = None
    suppress_implicit_reverse_fk: bool = False


class AdditionalKeyDef(BaseModel):
    """An additional primary or unique key: ``name -> {tableName, columnName}``."""

    model_config = ConfigDict(frozen=True)

    name: str
    table_name: str
    column_names: List[str]
