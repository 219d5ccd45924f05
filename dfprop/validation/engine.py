from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Optional

from dfprop.exceptions import DomainInvariantError
from dfprop.flexible import FlexibleMap
from dfprop.properties.additional_key import AdditionalKeyProperties
from dfprop.properties.sequence_identity import split_sub_column_key
from dfprop.utils.logging import logger

if TYPE_CHECKING:
    from dfprop.handler import PropertiesHandler

ALL_TABLE_MARKS = ("$$ALL$$", "*")


@dataclass(frozen=True)
class TableMeta:
    """Table name, column names and primary key read from the schema."""

    name: str
    columns: List[str] = field(default_factory=list)
    primary_key: List[str] = field(default_factory=list)

    def find_column(self, column_name: str) -> Optional[str]:
        """Column name as spelled in the schema, matched case-insensitively."""
        target = column_name.lower()
        for column in self.columns:
            if column.lower() == target:
                return column
        return None

    def has_column(self, column_name: str) -> bool:
        return self.find_column(column_name) is not None

    def contains_columns(self, column_names: Iterable[str]) -> bool:
        return all(self.has_column(name) for name in column_names)


class DefinitionValidator:
    """
    Checks resolved property groups against the tables of the schema.

    Each check raises DomainInvariantError on the first violation it finds.
    """

    def __init__(self, handler: "PropertiesHandler", tables: Iterable[TableMeta]):
        self.handler = handler
        self.tables = FlexibleMap((table.name, table) for table in tables)

    def validate(self) -> None:
        """Run every check."""
        logger.debug("Checking property definitions", tables=len(self.tables))
        self.check_additional_foreign_keys()
        self.check_additional_keys(self.handler.additional_primary_key)
        self.check_additional_keys(self.handler.additional_unique_key)
        self.check_common_columns()
        self.check_sequence_definitions()
        self.check_identity_definitions()
        self.check_optimistic_lock()
        logger.info("Property definitions match the schema", tables=len(self.tables))

    def find_table(self, table_name: Optional[str]) -> Optional[TableMeta]:
        if table_name is None:
            return None
        return self.tables.get(table_name)

    # ------------------------------------------------------------------
    # Additional foreign keys
    # ------------------------------------------------------------------
    def check_additional_foreign_keys(self) -> None:
        properties = self.handler.additional_foreign_key
        for name in properties.definition_names():
            definition = properties.find_definition(name)

            foreign_table = self.find_table(definition.foreign_table)
            if foreign_table is None:
                raise DomainInvariantError(
                    "Not found table by the foreignTableName of additionalForeignKey.",
                    items=[("Additional FK", name), ("Foreign Table", definition.foreign_table)],
                    advice=["Make sure the foreign table exists in the schema."],
                )
            foreign_columns = self._foreign_column_names(name, definition, foreign_table)
            missing = [c for c in foreign_columns if not foreign_table.has_column(c)]
            if missing:
                raise DomainInvariantError(
                    "Not found column by the foreignColumnName of additionalForeignKey.",
                    items=[
                        ("Additional FK", name),
                        ("Foreign Table", foreign_table.name),
                        ("NotFound Column", missing),
                    ],
                )

            if definition.local_table in ALL_TABLE_MARKS:
                if definition.fixed_only_join:
                    raise DomainInvariantError(
                        "Cannot use fixedOnlyJoin when all-table FK.",
                        items=[("Additional FK", name)],
                    )
                continue

            local_table = self.find_table(definition.local_table)
            if local_table is None:
                raise DomainInvariantError(
                    "Not found table by the localTableName of additionalForeignKey.",
                    items=[("Additional FK", name), ("Local Table", definition.local_table)],
                    advice=["Make sure the local table exists in the schema."],
                )
            self._check_local_columns(name, definition, local_table, foreign_columns)

    def _foreign_column_names(self, name, definition, foreign_table: TableMeta) -> List[str]:
        if definition.foreign_columns:
            return list(definition.foreign_columns)
        if not foreign_table.primary_key:
            raise DomainInvariantError(
                "Not found primary key on the foreign table of additionalForeignKey.",
                items=[("Additional FK", name), ("Foreign Table", foreign_table.name)],
                advice=["Foreign table should have primary keys."],
            )
        return list(foreign_table.primary_key)

    def _check_local_columns(
        self, name, definition, local_table: TableMeta, foreign_columns: List[str]
    ) -> None:
        local_columns = definition.local_columns or []
        if definition.fixed_only_join:
            if local_columns:
                raise DomainInvariantError(
                    "The localColumn should be omitted when fixedOnlyJoin is true.",
                    items=[
                        ("Additional FK", name),
                        ("Local Table", local_table.name),
                        ("Column List", local_columns),
                    ],
                )
            return
        if local_columns:
            missing = [c for c in local_columns if not local_table.has_column(c)]
            if missing:
                raise DomainInvariantError(
                    "Not found column by the localColumnName of additionalForeignKey.",
                    items=[
                        ("Additional FK", name),
                        ("Local Table", local_table.name),
                        ("NotFound Column", missing),
                    ],
                )
            return
        # omitted local columns follow the foreign column names
        if not local_table.contains_columns(foreign_columns):
            raise DomainInvariantError(
                "Not found the local column by the foreign column of additionalForeignKey.",
                items=[
                    ("Additional FK", name),
                    ("Local Table", local_table.name),
                    ("Foreign Column", foreign_columns),
                ],
                advice=[
                    "When localColumnName is omitted, the local table should have",
                    "the columns that are same as primary keys of foreign table.",
                ],
            )

    # ------------------------------------------------------------------
    # Additional primary / unique keys
    # ------------------------------------------------------------------
    def check_additional_keys(self, properties: AdditionalKeyProperties) -> None:
        for definition in properties.definitions():
            table = self.find_table(definition.table_name)
            if table is None:
                raise DomainInvariantError(
                    f"Not found table by the tableName of {properties.group_name}.",
                    items=[("Key", definition.name), ("Table", definition.table_name)],
                )
            missing = [c for c in definition.column_names if not table.has_column(c)]
            if missing:
                raise DomainInvariantError(
                    f"Not found column by the columnName of {properties.group_name}.",
                    items=[
                        ("Key", definition.name),
                        ("Table", table.name),
                        ("NotFound Column", missing),
                    ],
                )

    # ------------------------------------------------------------------
    # Common columns
    # ------------------------------------------------------------------
    def has_all_common_columns(self, table: TableMeta) -> bool:
        common_column = self.handler.common_column
        names = common_column.common_column_names()
        if not names:
            return False
        return all(
            table.has_column(common_column.convert_common_column_name(name, table.name))
            for name in names
        )

    def check_common_columns(self) -> None:
        common_column = self.handler.common_column
        if not common_column.has_common_column():
            return
        if any(self.has_all_common_columns(table) for table in self.tables.values()):
            return
        raise DomainInvariantError(
            "The table related to common columns was not found.",
            items=[("Common Column", common_column.common_column_names())],
            advice=[
                "At least one table should be related to common columns.",
                "The definition might contain a non-existent common column.",
            ],
        )

    # ------------------------------------------------------------------
    # Sequences and identities
    # ------------------------------------------------------------------
    def check_sequence_definitions(self) -> None:
        sequence_identity = self.handler.sequence_identity
        not_found = [
            table_name
            for table_name in sequence_identity.sequence_definition_map
            if self.find_table(table_name) is None
        ]
        for key in sequence_identity.sub_column_sequence_definition_map:
            table_name, column_name = split_sub_column_key(key)
            table = self.find_table(table_name)
            if table is None or not table.has_column(column_name):
                not_found.append(key)
        if not_found:
            raise DomainInvariantError(
                "The table name on the sequence definition was not found.",
                items=[
                    ("NotFound Table (or Column)", not_found),
                    ("Sequence Definition", dict(sequence_identity.sequence_definition_map)),
                ],
            )

    def check_identity_definitions(self) -> None:
        identity_map = self.handler.sequence_identity.identity_definition_map
        for table_name, column_name in identity_map.items():
            table = self.find_table(table_name)
            if table is None or not table.has_column(column_name):
                raise DomainInvariantError(
                    "The identity column on the identity definition was not found.",
                    items=[("Table", table_name), ("Column", column_name)],
                )

    # ------------------------------------------------------------------
    # Optimistic lock
    # ------------------------------------------------------------------
    def check_optimistic_lock(self) -> None:
        update_date = self.handler.optimistic_lock.update_date_field_name
        if not update_date:
            return
        if any(table.has_column(update_date) for table in self.tables.values()):
            return
        raise DomainInvariantError(
            "The update date column of optimistic lock was not found in any table.",
            items=[("Update Date Column", update_date)],
        )
