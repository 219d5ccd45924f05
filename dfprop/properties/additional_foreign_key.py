"""Additional (virtual) foreign keys: ``additionalForeignKeyMap``."""

from typing import List, Optional

from dfprop.accessor import split_slash_list
from dfprop.config import AdditionalForeignKeyDef
from dfprop.exceptions import DomainInvariantError
from dfprop.fixed_condition import FixedConditionResolver
from dfprop.properties.base import NamedDefinitionProperties
from dfprop.tree import ABSENT, ValueNode

KEY_LOCAL_TABLE_NAME = "localTableName"
KEY_FOREIGN_TABLE_NAME = "foreignTableName"
KEY_LOCAL_COLUMN_NAME = "localColumnName"
KEY_FOREIGN_COLUMN_NAME = "foreignColumnName"
KEY_FIXED_CONDITION = "fixedCondition"
KEY_FIXED_SUFFIX = "fixedSuffix"
KEY_FIXED_INLINE = "fixedInline"
KEY_FIXED_REFERRER = "fixedReferrer"
KEY_FIXED_ONLY_JOIN = "fixedOnlyJoin"
KEY_SUPPRESS_JOIN = "suppressJoin"
KEY_SUPPRESS_SUBQUERY = "suppressSubQuery"
KEY_COMMENT = "comment"
KEY_DEPRECATED = "deprecated"
KEY_SUPPRESS_IMPLICIT_REVERSE_FK = "isSuppressImplicitReverseFK"


class AdditionalForeignKeyProperties(NamedDefinitionProperties):
    """
    Foreign keys that do not exist in the database but should be generated.

    Example:
    ```
    map:{
        ; FK_MEMBER_MEMBER_STATUS = map:{
            ; localTableName = MEMBER ; foreignTableName = MEMBER_STATUS
            ; localColumnName = MEMBER_STATUS_CODE
        }
    }
    ```
    """

    group_name = "additionalForeignKeyMap"
    definition_title = "additional foreign key"

    def __init__(
        self,
        tree: ValueNode = ABSENT,
        fixed_condition_resolver: Optional[FixedConditionResolver] = None,
    ):
        self.fixed_condition_resolver = fixed_condition_resolver or FixedConditionResolver()
        super().__init__(tree)

    def _build(self) -> None:
        super()._build()
        for name in self.definition_names():
            self._check_fixed_only_join(name)
            self._check_column_pairs(name)

    def _check_fixed_only_join(self, name: str) -> None:
        if not self._find_flag(name, KEY_FIXED_ONLY_JOIN):
            return
        if self._find_trimmed_value(name, KEY_FIXED_CONDITION) is None:
            raise DomainInvariantError(
                "fixedCondition is required when fixedOnlyJoin.",
                items=[("Foreign Key", name)],
                advice=["Add fixedCondition or remove fixedOnlyJoin."],
            )
        if self._find_flag(name, KEY_FIXED_REFERRER):
            raise DomainInvariantError(
                "Cannot use fixedReferrer when fixedOnlyJoin.",
                items=[("Foreign Key", name)],
            )

    def _check_column_pairs(self, name: str) -> None:
        local_columns = self.find_local_column_name_list(name)
        foreign_columns = self.find_foreign_column_name_list(name)
        if local_columns and foreign_columns and len(local_columns) != len(foreign_columns):
            raise DomainInvariantError(
                "The numbers of local and foreign columns are different.",
                items=[
                    ("Foreign Key", name),
                    ("Local Columns", local_columns),
                    ("Foreign Columns", foreign_columns),
                ],
                advice=["Pair each local column with one foreign column, e.g. A/B and X/Y."],
            )

    # ------------------------------------------------------------------
    # Finders
    # ------------------------------------------------------------------
    def find_local_table_name(self, foreign_key_name: str) -> Optional[str]:
        return self._find_attribute_value(foreign_key_name, KEY_LOCAL_TABLE_NAME)

    def find_foreign_table_name(self, foreign_key_name: str) -> Optional[str]:
        return self._find_attribute_value(foreign_key_name, KEY_FOREIGN_TABLE_NAME)

    def find_local_column_name_list(self, foreign_key_name: str) -> Optional[List[str]]:
        return split_slash_list(self._find_attribute_value(foreign_key_name, KEY_LOCAL_COLUMN_NAME))

    def find_foreign_column_name_list(self, foreign_key_name: str) -> Optional[List[str]]:
        return split_slash_list(
            self._find_attribute_value(foreign_key_name, KEY_FOREIGN_COLUMN_NAME)
        )

    def find_fixed_condition(self, foreign_key_name: str) -> Optional[str]:
        """Fixed condition normalized for embedding into generated queries."""
        raw = self._find_attribute_value(foreign_key_name, KEY_FIXED_CONDITION)
        return self.fixed_condition_resolver.resolve(raw)

    def find_fixed_suffix(self, foreign_key_name: str) -> Optional[str]:
        return self._find_attribute_value(foreign_key_name, KEY_FIXED_SUFFIX)

    def find_fixed_inline(self, foreign_key_name: str) -> Optional[str]:
        return self._find_attribute_value(foreign_key_name, KEY_FIXED_INLINE)

    def find_fixed_referrer(self, foreign_key_name: str) -> Optional[str]:
        return self._find_attribute_value(foreign_key_name, KEY_FIXED_REFERRER)

    def find_fixed_only_join(self, foreign_key_name: str) -> Optional[str]:
        return self._find_attribute_value(foreign_key_name, KEY_FIXED_ONLY_JOIN)

    def find_suppress_join(self, foreign_key_name: str) -> Optional[str]:
        return self._find_attribute_value(foreign_key_name, KEY_SUPPRESS_JOIN)

    def find_suppress_subquery(self, foreign_key_name: str) -> Optional[str]:
        return self._find_attribute_value(foreign_key_name, KEY_SUPPRESS_SUBQUERY)

    def find_comment(self, foreign_key_name: str) -> Optional[str]:
        return self._find_attribute_value(foreign_key_name, KEY_COMMENT)

    def find_deprecated(self, foreign_key_name: str) -> Optional[str]:
        return self._find_attribute_value(foreign_key_name, KEY_DEPRECATED)

    def is_suppress_implicit_reverse_fk(self, foreign_key_name: str) -> bool:
        return self._find_flag(foreign_key_name, KEY_SUPPRESS_IMPLICIT_REVERSE_FK)

    # ------------------------------------------------------------------
    # Resolved definitions
    # ------------------------------------------------------------------
    def find_definition(self, foreign_key_name: str) -> AdditionalForeignKeyDef:
        """All options of one foreign key as a frozen model."""
        name = foreign_key_name
        return AdditionalForeignKeyDef(
            name=name,
            local_table=self._find_trimmed_value(name, KEY_LOCAL_TABLE_NAME),
            foreign_table=self._find_trimmed_value(name, KEY_FOREIGN_TABLE_NAME),
            local_columns=self.find_local_column_name_list(name),
            foreign_columns=self.find_foreign_column_name_list(name),
            fixed_condition=self.find_fixed_condition(name),
            fixed_suffix=self._find_trimmed_value(name, KEY_FIXED_SUFFIX),
            fixed_inline=self._find_flag(name, KEY_FIXED_INLINE),
            fixed_referrer=self._find_flag(name, KEY_FIXED_REFERRER),
            fixed_only_join=self._find_flag(name, KEY_FIXED_ONLY_JOIN),
            suppress_join=self._find_flag(name, KEY_SUPPRESS_JOIN),
            suppress_subquery=self._find_flag(name, KEY_SUPPRESS_SUBQUERY),
            comment=self._find_trimmed_value(name, KEY_COMMENT),
            deprecated=self._find_trimmed_value(name, KEY_DEPRECATED),
            suppress_implicit_reverse_fk=self.is_suppress_implicit_reverse_fk(name),
        )

    def definitions(self) -> List[AdditionalForeignKeyDef]:
        return [self.find_definition(name) for name in self.definition_names()]
