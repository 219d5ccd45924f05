"""Additional primary and unique keys.

Both groups share one shape::

    map:{
        ; PK_MEMBER_VIEW = map:{ ; tableName = VW_MEMBER ; columnName = MEMBER_ID }
        ; UQ_PURCHASE = map:{ ; tableName = PURCHASE ; columnName = MEMBER_ID/PRODUCT_ID }
    }
"""

from typing import List, Optional

from dfprop.accessor import split_slash_list
from dfprop.config import AdditionalKeyDef
from dfprop.exceptions import MissingRequiredError
from dfprop.properties.base import NamedDefinitionProperties

KEY_TABLE_NAME = "tableName"
KEY_COLUMN_NAME = "columnName"


class AdditionalKeyProperties(NamedDefinitionProperties):
    """Named key definitions with a table and a slash-delimited column list."""

    def _build(self) -> None:
        super()._build()
        for name in self.definition_names():
            for option_key in (KEY_TABLE_NAME, KEY_COLUMN_NAME):
                value = self._find_attribute_value(name, option_key)
                if value is None or not value.strip():
                    raise MissingRequiredError(self.group_name, f"{name} > {option_key}", value)

    def find_table_name(self, key_name: str) -> Optional[str]:
        return self._find_attribute_value(key_name, KEY_TABLE_NAME)

    def find_column_name_list(self, key_name: str) -> Optional[List[str]]:
        return split_slash_list(self._find_attribute_value(key_name, KEY_COLUMN_NAME))

    def find_definition(self, key_name: str) -> AdditionalKeyDef:
        return AdditionalKeyDef(
            name=key_name,
            table_name=self.find_table_name(key_name).strip(),
            column_names=self.find_column_name_list(key_name),
        )

    def definitions(self) -> List[AdditionalKeyDef]:
        return [self.find_definition(name) for name in self.definition_names()]

    def definitions_for_table(self, table_name: str) -> List[AdditionalKeyDef]:
        """Definitions whose table matches ``table_name`` (case-insensitive)."""
        target = table_name.lower()
        return [d for d in self.definitions() if d.table_name.lower() == target]


class AdditionalPrimaryKeyProperties(AdditionalKeyProperties):
    """Primary keys for tables and views that have none in the database."""

    group_name = "additionalPrimaryKeyMap"
    definition_title = "additional primary key"


class AdditionalUniqueKeyProperties(AdditionalKeyProperties):
    """Unique keys the database does not declare."""

    group_name = "additionalUniqueKeyMap"
    definition_title = "additional unique key"
