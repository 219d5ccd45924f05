"""Database type to native type overrides: ``typeMappingMap``.

One flat mapping carries three kinds of entries, told apart by key shape:

* ``$$df:point$$`` - point (spatial) types, a nested ``pointName -> {attr: value}`` map
* ``$$VARCHAR2$$`` - overrides keyed by database type name
* ``VARCHAR`` - overrides keyed by JDBC type

The point shape is checked first. The three tables are kept apart and queried
independently.
"""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from dfprop.config import TemporalMode
from dfprop.flexible import FlexibleMap
from dfprop.language import JAVA_TYPE_MAPPING, LanguageTypeMapping
from dfprop.properties.base import AbstractProperties
from dfprop.tree import ABSENT, ValueNode
from dfprop.utils.logging import logger

POINT_TYPE_KEY = "$$df:point$$"
NAME_TYPE_MARK = "$$"

TEMPORAL_OVERRIDES: Dict[TemporalMode, Dict[str, str]] = {
    TemporalMode.NONE: {},
    TemporalMode.JAVA8: {
        "DATE": "java.time.LocalDate",
        "TIMESTAMP": "java.time.LocalDateTime",
        "TIME": "java.time.LocalTime",
    },
    TemporalMode.JODA: {
        "DATE": "org.joda.time.LocalDate",
        "TIMESTAMP": "org.joda.time.LocalDateTime",
        "TIME": "org.joda.time.LocalTime",
    },
}


def is_point_type_mapping_key(key: str) -> bool:
    return key == POINT_TYPE_KEY


def is_name_type_mapping_key(key: str) -> bool:
    if is_point_type_mapping_key(key):
        return False
    mark = NAME_TYPE_MARK
    return key.startswith(mark) and key.endswith(mark) and len(key) > len(mark) * 2


def is_jdbc_type_mapping_key(key: str) -> bool:
    return not is_name_type_mapping_key(key) and not is_point_type_mapping_key(key)


def extract_db_type_name(key: str) -> str:
    """``$$VARCHAR2$$`` -> ``VARCHAR2``."""
    return key[len(NAME_TYPE_MARK) : -len(NAME_TYPE_MARK)]


def ends_with_ignore_case(text: str, suffixes: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(lowered.endswith(suffix.lower()) for suffix in suffixes)


class TypeMappingProperties(AbstractProperties):
    """Type mapping tables layered over the target language defaults.

    Args:
        tree: Root of the property document
        language_type_mapping: Defaults and classification lists of the target language
        temporal_mode: Temporal library override for DATE/TIMESTAMP/TIME
    """

    group_name = "typeMappingMap"

    def __init__(
        self,
        tree: ValueNode = ABSENT,
        language_type_mapping: LanguageTypeMapping = JAVA_TYPE_MAPPING,
        temporal_mode: TemporalMode = TemporalMode.NONE,
    ):
        self.language_type_mapping = language_type_mapping
        self.temporal_mode = temporal_mode
        super().__init__(tree)

    def _build(self) -> None:
        jdbc_type_map: Dict[str, str] = {}
        name_type_map: Dict[str, str] = {}
        point_type_map: Dict[str, FlexibleMap] = {}

        for key, value in self.mapping.items():
            key = self.accessor.expect_key([], key)
            if is_point_type_mapping_key(key):
                point_node = self.accessor.expect_mapping([key], value)
                validated = self.accessor.validate_two_level(point_node)
                for point_name, attributes in validated.items():
                    point_type_map[point_name] = FlexibleMap(attributes)
                continue
            native = self.accessor.expect_string([key], value)
            if native is None:
                continue
            if is_name_type_mapping_key(key):
                name_type_map[extract_db_type_name(key)] = native
            else:
                jdbc_type_map[key] = native

        self._jdbc_type_mapping_map = jdbc_type_map
        self._name_type_mapping_map = name_type_map
        self._point_type_mapping_map = FlexibleMap(point_type_map)
        self._jdbc_to_native_map = self._build_jdbc_to_native_map()

        logger.debug(
            "Resolved type mapping",
            jdbc_overrides=len(jdbc_type_map),
            name_overrides=len(name_type_map),
            point_types=len(point_type_map),
            temporal_mode=self.temporal_mode.value,
        )

    def _build_jdbc_to_native_map(self) -> Dict[str, str]:
        native_map = self.language_type_mapping.default_jdbc_to_native_map()
        native_map.update(TEMPORAL_OVERRIDES[self.temporal_mode])
        for jdbc_type, native_type in self._jdbc_type_mapping_map.items():
            native_map[jdbc_type] = native_type
        return native_map

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------
    @property
    def jdbc_type_mapping_map(self) -> Mapping[str, str]:
        """JDBC-type overrides exactly as written."""
        return MappingProxyType(self._jdbc_type_mapping_map)

    @property
    def jdbc_to_native_map(self) -> Mapping[str, str]:
        """Language defaults, then the temporal overrides, then the JDBC overrides."""
        return MappingProxyType(self._jdbc_to_native_map)

    @property
    def name_to_jdbc_type_map(self) -> Mapping[str, str]:
        return MappingProxyType(self._name_type_mapping_map)

    @property
    def point_to_jdbc_type_map(self) -> Mapping[str, Mapping[str, str]]:
        return self._point_type_mapping_map

    def find_native_type(self, jdbc_type: str) -> Optional[str]:
        return self._jdbc_to_native_map.get(jdbc_type)

    def find_name_type(self, db_type_name: str) -> Optional[str]:
        return self._name_type_mapping_map.get(db_type_name)

    def find_point_type(self, point_name: str) -> Optional[Mapping[str, str]]:
        return self._point_type_mapping_map.get(point_name)

    # ------------------------------------------------------------------
    # Native type classification
    # ------------------------------------------------------------------
    @property
    def native_string_list(self) -> List[str]:
        return list(self.language_type_mapping.string_list)

    @property
    def native_number_list(self) -> List[str]:
        return list(self.language_type_mapping.number_list)

    @property
    def native_date_list(self) -> List[str]:
        return list(self.language_type_mapping.date_list)

    @property
    def native_boolean_list(self) -> List[str]:
        return list(self.language_type_mapping.boolean_list)

    @property
    def native_binary_list(self) -> List[str]:
        return list(self.language_type_mapping.binary_list)

    def is_native_string_object(self, native_type: str) -> bool:
        return ends_with_ignore_case(native_type, self.native_string_list)

    def is_native_number_object(self, native_type: str) -> bool:
        return ends_with_ignore_case(native_type, self.native_number_list)

    def is_native_date_object(self, native_type: str) -> bool:
        return ends_with_ignore_case(native_type, self.native_date_list)

    def is_native_boolean_object(self, native_type: str) -> bool:
        return ends_with_ignore_case(native_type, self.native_boolean_list)

    def is_native_binary_object(self, native_type: str) -> bool:
        return ends_with_ignore_case(native_type, self.native_binary_list)
