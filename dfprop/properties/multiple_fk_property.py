"""Alias names for multi-column foreign keys: ``multipleFKPropertyMap``."""

from typing import Dict, List, Optional, Sequence

from dfprop.accessor import SLASH_DELIMITER
from dfprop.exceptions import UnknownDefinitionError
from dfprop.flexible import FlexibleMap
from dfprop.properties.base import NamedDefinitionProperties


class MultipleFKPropertyProperties(NamedDefinitionProperties):
    """
    Relation names for foreign keys made of several columns.

    Table names and column combinations are matched case-insensitively.

    Example:
    ```
    map:{
        ; PURCHASE = map:{
            ; MEMBER_ID/PRODUCT_ID = memberProductLatest
        }
    }
    ```
    """

    group_name = "multipleFKPropertyMap"
    definition_title = "multiple FK property table"

    def _build(self) -> None:
        super()._build()
        alias_map: Dict[str, FlexibleMap] = {}
        for table_name, column_map in self._definition_map.items():
            alias_map[table_name] = FlexibleMap(
                (self.build_column_key(key.split(SLASH_DELIMITER)), alias.strip())
                for key, alias in column_map.items()
                if alias.strip()
            )
        self._alias_map = FlexibleMap(alias_map)

    @staticmethod
    def build_column_key(column_names: Sequence[str]) -> str:
        return SLASH_DELIMITER.join(name.strip() for name in column_names if name.strip())

    def has_table(self, table_name: str) -> bool:
        return table_name in self._alias_map

    def has_column_alias(self, table_name: str, column_names: Sequence[str]) -> bool:
        if table_name not in self._alias_map:
            return False
        return self.build_column_key(column_names) in self._alias_map[table_name]

    def find_column_alias_name(
        self, table_name: str, column_names: Sequence[str]
    ) -> Optional[str]:
        """Alias of a column combination on a table.

        Returns:
            The alias, or ``None`` if the table defines none for the columns

        Raises:
            UnknownDefinitionError: If the table is not in the group
        """
        if table_name not in self._alias_map:
            raise UnknownDefinitionError(
                self.definition_title,
                table_name,
                option=self.build_column_key(column_names),
                available=list(self._alias_map.keys()),
            )
        return self._alias_map[table_name].get(self.build_column_key(column_names))

    def alias_names(self, table_name: str) -> List[str]:
        if table_name not in self._alias_map:
            return []
        return list(self._alias_map[table_name].values())
