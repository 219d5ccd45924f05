"""Common columns and their setup logic: ``commonColumnMap``.

The group holds three maps::

    map:{
        ; commonColumnMap = map:{
            ; REGISTER_DATETIME = TIMESTAMP ; REGISTER_USER = VARCHAR
            ; UPDATE_DATETIME = TIMESTAMP   ; UPDATE_USER = VARCHAR
        }
        ; beforeInsertMap = map:{
            ; REGISTER_DATETIME = $$AccessContext$$.getAccessTimestampOnThread()
            ; REGISTER_USER     = $$AccessContext$$.getAccessUserOnThread()
            ; UPDATE_DATETIME   = entity.getRegisterDatetime()
            ; UPDATE_USER       = entity.getRegisterUser()
        }
        ; beforeUpdateMap = map:{
            ; UPDATE_DATETIME = $$AccessContext$$.getAccessTimestampOnThread()
            ; UPDATE_USER     = $$AccessContext$$.getAccessUserOnThread()
        }
    }
"""

from typing import List, Optional

from dfprop.config import TemporalMode
from dfprop.flexible import FlexibleMap
from dfprop.properties.base import AbstractProperties
from dfprop.tree import ABSENT, ValueNode
from dfprop.utils.logging import logger

KEY_COMMON_COLUMN_MAP = "commonColumnMap"
KEY_BEFORE_INSERT_MAP = "beforeInsertMap"
KEY_BEFORE_UPDATE_MAP = "beforeUpdateMap"

CONVERSION_PREFIX_MARK = "$-"
TABLE_NAME_MARKS = ("TABLE_NAME", "table_name")
INVOKING_MARK = "$"
ALLCOMMON_MARK = "$$allcommon$$"
ACCESS_CONTEXT_MARK = "$$AccessContext$$"
ACCESS_DATE_EXP = ACCESS_CONTEXT_MARK + ".getAccessDateOnThread()"
ACCESS_TIMESTAMP_EXP = ACCESS_CONTEXT_MARK + ".getAccessTimestampOnThread()"

INVOKING_REPLACEMENTS = (
    ("$$Semicolon$$", ";"),
    ("$$StartBrace$$", "{"),
    ("$$EndBrace$$", "}"),
)


class CommonColumnProperties(AbstractProperties):
    """Columns shared by many tables and the logic that fills them.

    Args:
        tree: Root of the property document
        base_common_package: Replaces ``$$allcommon$$`` in setup logic
        access_context_fqcn: Replaces ``$$AccessContext$$`` in setup logic
        temporal_mode: Joda-Time wraps access date/timestamp expressions
    """

    group_name = "commonColumnMap"

    def __init__(
        self,
        tree: ValueNode = ABSENT,
        base_common_package: str = "allcommon",
        access_context_fqcn: str = "allcommon.AccessContext",
        temporal_mode: TemporalMode = TemporalMode.NONE,
    ):
        self.base_common_package = base_common_package
        self.access_context_fqcn = access_context_fqcn
        self.temporal_mode = temporal_mode
        super().__init__(tree)

    def _build(self) -> None:
        accessor = self.accessor
        column_node = accessor.get_map(self.mapping, KEY_COMMON_COLUMN_MAP)
        self._common_column_map = FlexibleMap(
            accessor.string_map(column_node, [KEY_COMMON_COLUMN_MAP])
        )
        self._before_insert_map = self._build_logic_map(KEY_BEFORE_INSERT_MAP)
        self._before_update_map = self._build_logic_map(KEY_BEFORE_UPDATE_MAP)
        logger.debug(
            "Resolved common columns",
            columns=len(self._common_column_map),
            before_insert=len(self._before_insert_map),
            before_update=len(self._before_update_map),
        )

    def _build_logic_map(self, key: str) -> FlexibleMap:
        node = self.accessor.get_map(self.mapping, key)
        raw_map = self.accessor.string_map(node, [key])
        return FlexibleMap(
            (column, self.filter_setup_logic(logic)) for column, logic in raw_map.items()
        )

    def filter_setup_logic(self, logic: str) -> str:
        """Expand the package and access-context marks of one setup logic."""
        if ALLCOMMON_MARK in logic:
            logic = logic.replace(ALLCOMMON_MARK, self.base_common_package)
        if self.temporal_mode is TemporalMode.JODA:
            if logic == ACCESS_DATE_EXP:
                logic = f"org.joda.time.LocalDate.fromDateFields({logic})"
            elif logic == ACCESS_TIMESTAMP_EXP:
                logic = f"org.joda.time.LocalDateTime.fromDateFields({logic})"
        if ACCESS_CONTEXT_MARK in logic:
            logic = logic.replace(ACCESS_CONTEXT_MARK, self.access_context_fqcn)
        return logic

    # ------------------------------------------------------------------
    # Common columns
    # ------------------------------------------------------------------
    @property
    def common_column_map(self) -> FlexibleMap:
        """Column name to JDBC type, case-insensitive."""
        return self._common_column_map

    def has_common_column(self) -> bool:
        return len(self._common_column_map) > 0

    def is_common_column(self, column_name: str) -> bool:
        return column_name in self._common_column_map

    def common_column_names(self) -> List[str]:
        return list(self._common_column_map.keys())

    def common_column_conversion_names(self) -> List[str]:
        return [
            name for name in self._common_column_map if self.is_common_column_conversion(name)
        ]

    @staticmethod
    def is_common_column_conversion(common_column_name: str) -> bool:
        return common_column_name.startswith(CONVERSION_PREFIX_MARK)

    @staticmethod
    def filter_common_column(common_column_name: str) -> str:
        """Strip the ``$-`` conversion prefix."""
        if common_column_name.startswith(CONVERSION_PREFIX_MARK):
            return common_column_name[len(CONVERSION_PREFIX_MARK) :]
        return common_column_name

    def convert_common_column_name(self, common_column_name: str, table_name: str) -> str:
        """Actual column name of a common column on ``table_name``.

        ``$-TABLE_NAME_REGISTER_USER`` on ``MEMBER`` is ``MEMBER_REGISTER_USER``.
        """
        if not self.is_common_column_conversion(common_column_name):
            return common_column_name
        filtered = self.filter_common_column(common_column_name)
        for mark in TABLE_NAME_MARKS:
            filtered = filtered.replace(mark, table_name)
        return filtered

    # ------------------------------------------------------------------
    # Setup logic
    # ------------------------------------------------------------------
    @property
    def before_insert_map(self) -> FlexibleMap:
        return self._before_insert_map

    @property
    def before_update_map(self) -> FlexibleMap:
        return self._before_update_map

    def has_before_insert_logic(self, column_name: str) -> bool:
        logic = self._before_insert_map.get(column_name)
        return logic is not None and bool(logic.strip())

    def has_before_update_logic(self, column_name: str) -> bool:
        logic = self._before_update_map.get(column_name)
        return logic is not None and bool(logic.strip())

    def find_before_insert_logic(self, column_name: str) -> Optional[str]:
        return self._before_insert_map.get(column_name)

    def find_before_update_logic(self, column_name: str) -> Optional[str]:
        return self._before_update_map.get(column_name)

    def is_existing_setup_element(self) -> bool:
        return len(self._before_insert_map) > 0 or len(self._before_update_map) > 0

    @staticmethod
    def is_invoking_logic(logic: str) -> bool:
        """``$entity.classifyDeleteFlgTrue()`` style logic calls a method."""
        return logic.startswith(INVOKING_MARK)

    @staticmethod
    def remove_invoking_mark(logic: str) -> str:
        """Drop the leading ``$``, expand escaped symbols and end with ``;``."""
        filtered = logic[len(INVOKING_MARK) :]
        for mark, symbol in INVOKING_REPLACEMENTS:
            filtered = filtered.replace(mark, symbol)
        if not filtered.strip().endswith(";"):
            filtered = filtered + ";"
        return filtered
