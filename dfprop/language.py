"""Native type mappings of the supported target languages."""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from dfprop.exceptions import UnknownDefinitionError


@dataclass(frozen=True)
class LanguageTypeMapping:
    """Default JDBC-to-native mapping and type classification lists."""

    language: str
    jdbc_to_native: Dict[str, str] = field(default_factory=dict)
    string_list: Tuple[str, ...] = ()
    number_list: Tuple[str, ...] = ()
    date_list: Tuple[str, ...] = ()
    boolean_list: Tuple[str, ...] = ()
    binary_list: Tuple[str, ...] = ()

    def default_jdbc_to_native_map(self) -> Dict[str, str]:
        """Fresh copy of the default mapping, safe to overlay."""
        return dict(self.jdbc_to_native)


JAVA_TYPE_MAPPING = LanguageTypeMapping(
    language="java",
    jdbc_to_native={
        "CHAR": "String",
        "VARCHAR": "String",
        "LONGVARCHAR": "String",
        "NCHAR": "String",
        "NVARCHAR": "String",
        "LONGNVARCHAR": "String",
        "CLOB": "String",
        "NUMERIC": "java.math.BigDecimal",
        "DECIMAL": "java.math.BigDecimal",
        "BIT": "Boolean",
        "BOOLEAN": "Boolean",
        "TINYINT": "Integer",
        "SMALLINT": "Integer",
        "INTEGER": "Integer",
        "BIGINT": "Long",
        "REAL": "java.math.BigDecimal",
        "FLOAT": "java.math.BigDecimal",
        "DOUBLE": "java.math.BigDecimal",
        "DATE": "java.util.Date",
        "TIME": "java.sql.Time",
        "TIMESTAMP": "java.sql.Timestamp",
        "BINARY": "byte[]",
        "VARBINARY": "byte[]",
        "LONGVARBINARY": "byte[]",
        "BLOB": "byte[]",
        "ARRAY": "Object",
        "UUID": "java.util.UUID",
        "OTHER": "Object",
    },
    string_list=("String",),
    number_list=("Byte", "Short", "Integer", "Long", "Float", "Double", "BigDecimal", "BigInteger"),
    date_list=("Date", "Time", "Timestamp", "LocalDate", "LocalDateTime", "LocalTime"),
    boolean_list=("Boolean",),
    binary_list=("byte[]",),
)

CSHARP_TYPE_MAPPING = LanguageTypeMapping(
    language="csharp",
    jdbc_to_native={
        "CHAR": "String",
        "VARCHAR": "String",
        "LONGVARCHAR": "String",
        "NCHAR": "String",
        "NVARCHAR": "String",
        "CLOB": "String",
        "NUMERIC": "decimal?",
        "DECIMAL": "decimal?",
        "BIT": "bool?",
        "BOOLEAN": "bool?",
        "TINYINT": "int?",
        "SMALLINT": "int?",
        "INTEGER": "int?",
        "BIGINT": "long?",
        "REAL": "decimal?",
        "FLOAT": "decimal?",
        "DOUBLE": "decimal?",
        "DATE": "DateTime?",
        "TIME": "DateTime?",
        "TIMESTAMP": "DateTime?",
        "BINARY": "byte[]",
        "VARBINARY": "byte[]",
        "LONGVARBINARY": "byte[]",
        "BLOB": "byte[]",
        "UUID": "Guid?",
        "OTHER": "Object",
    },
    string_list=("String", "string"),
    number_list=("decimal?", "int?", "long?", "decimal", "int", "long"),
    date_list=("DateTime?", "DateTime"),
    boolean_list=("bool?", "bool"),
    binary_list=("byte[]",),
)

_LANGUAGES: Dict[str, LanguageTypeMapping] = {
    JAVA_TYPE_MAPPING.language: JAVA_TYPE_MAPPING,
    CSHARP_TYPE_MAPPING.language: CSHARP_TYPE_MAPPING,
}


def get_language_type_mapping(language: str) -> LanguageTypeMapping:
    """Look up a target language (case-insensitive).

    Raises:
        UnknownDefinitionError: If the language is not supported
    """
    mapping = _LANGUAGES.get(language.strip().lower())
    if mapping is None:
        raise UnknownDefinitionError(
            "target language", language, option="targetLanguage", available=list(_LANGUAGES)
        )
    return mapping


def list_languages() -> List[str]:
    return list(_LANGUAGES.keys())
