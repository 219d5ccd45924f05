"""Documented not-null columns: ``additionalNotNullMap``."""

from typing import Dict, List, Optional

from dfprop.config import NotNullNuance
from dfprop.exceptions import DomainInvariantError
from dfprop.flexible import FlexibleMap
from dfprop.properties.base import AbstractProperties
from dfprop.tree import EMPTY_MAPPING, AbsentNode

KEY_ALL = "$$ALL$$"
KEY_COLUMN_MAP = "columnMap"
KEY_NUANCE = "nuance"

NUANCE_EXAMPLES = [
    "BIRTHDATE = map:{ nuance = business }",
    "BIRTHDATE = map:{ nuance = maybe }",
]


class AdditionalNotNullProperties(AbstractProperties):
    """
    Columns that are nullable in DDL but not null in practice.

    ``$$ALL$$`` applies its columns to every table. The nuance of a column
    is ``business`` (not null except bugs) or ``maybe`` (possibly not null).

    Example:
    ```
    map:{
        ; $$ALL$$ = map:{
            ; columnMap = map:{ ; REGISTER_USER = map:{ nuance = business } }
        }
        ; MEMBER = map:{
            ; columnMap = map:{ ; BIRTHDATE = map:{ nuance = maybe } }
        }
    }
    ```
    """

    group_name = "additionalNotNullMap"

    def _build(self) -> None:
        accessor = self.accessor
        table_map: Dict[str, FlexibleMap] = {}
        for table_name, table_node in self.mapping.items():
            table_name = accessor.expect_key([], table_name)
            table_mapping = accessor.expect_mapping([table_name], table_node)
            column_node = table_mapping.get(KEY_COLUMN_MAP)
            column_mapping = EMPTY_MAPPING
            if not isinstance(column_node, AbsentNode):
                column_mapping = accessor.expect_mapping([table_name, KEY_COLUMN_MAP], column_node)
            columns: Dict[str, NotNullNuance] = {}
            for column_name, element_node in column_mapping.items():
                column_name = accessor.expect_key([table_name, KEY_COLUMN_MAP], column_name)
                path = [table_name, KEY_COLUMN_MAP, column_name]
                element = accessor.string_map(accessor.expect_mapping(path, element_node), path)
                columns[column_name] = self._determine_nuance(table_name, column_name, element)
            table_map[table_name] = FlexibleMap(columns)
        self._not_null_map = FlexibleMap(table_map)

    def _determine_nuance(
        self, table_name: str, column_name: str, element: Dict[str, str]
    ) -> NotNullNuance:
        nuance = element.get(KEY_NUANCE)
        if nuance is None or not nuance.strip():
            raise DomainInvariantError(
                "Not found the nuance property of additionalNotNull.",
                items=[("Table", table_name), ("Column", column_name), ("Wrong Map", element)],
                advice=["The nuance property is required as 'business' or 'maybe'."]
                + NUANCE_EXAMPLES,
            )
        try:
            return NotNullNuance(nuance.strip().lower())
        except ValueError as e:
            raise DomainInvariantError(
                "Wrong expression for additionalNotNull nuance.",
                items=[("Table", table_name), ("Column", column_name), ("Wrong Map", element)],
                advice=["The nuance property must be 'business' or 'maybe'."] + NUANCE_EXAMPLES,
            ) from e

    @property
    def additional_not_null_map(self) -> FlexibleMap:
        return self._not_null_map

    def table_names(self) -> List[str]:
        return [name for name in self._not_null_map if name != KEY_ALL]

    def find_nuance(self, table_name: str, column_name: str) -> Optional[NotNullNuance]:
        """Nuance defined for the table itself, else for ``$$ALL$$``."""
        columns = self._not_null_map.get(table_name)
        if columns is not None and column_name in columns:
            return columns[column_name]
        all_columns = self._not_null_map.get(KEY_ALL)
        if all_columns is not None:
            return all_columns.get(column_name)
        return None

    def is_column_not_null_business(self, table_name: str, column_name: str) -> bool:
        return self._has_nuance(table_name, column_name, NotNullNuance.BUSINESS)

    def is_column_not_null_maybe(self, table_name: str, column_name: str) -> bool:
        return self._has_nuance(table_name, column_name, NotNullNuance.MAYBE)

    def _has_nuance(self, table_name: str, column_name: str, nuance: NotNullNuance) -> bool:
        columns = self._not_null_map.get(table_name)
        if columns is not None and columns.get(column_name) is nuance:
            return True
        all_columns = self._not_null_map.get(KEY_ALL)
        return all_columns is not None and all_columns.get(column_name) is nuance
