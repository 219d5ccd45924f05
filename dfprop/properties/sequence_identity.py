"""Sequences and identities: ``sequenceDefinitionMap`` and ``identityDefinitionMap``.

Example::

    sequenceDefinitionMap:
        map:{
            ; MEMBER = SEQ_MEMBER
            ; PURCHASE = SEQ_PURCHASE:dfcache(50)
            ; MEMBER_LOGIN.LOGIN_NO = SEQ_LOGIN_NO
        }

    identityDefinitionMap:
        map:{ ; MEMBER_STATUS = MEMBER_STATUS_ID }

A key without ``.`` names the table of a primary-key sequence; ``TABLE.COLUMN``
names a sub-column sequence. Text after the last ``:`` is a hint.
"""

from typing import Dict, Optional, Tuple

from dfprop.accessor import TypedAccessor
from dfprop.exceptions import DomainInvariantError
from dfprop.flexible import FlexibleMap
from dfprop.properties.base import AbstractProperties
from dfprop.tree import ABSENT, PropertyGroup, ValueNode
from dfprop.utils.logging import logger

IDENTITY_GROUP_NAME = "identityDefinitionMap"
SEQUENCE_HINT_MARK = ":"
SUB_COLUMN_DELIMITER = "."
CACHE_MARK = "dfcache("
CACHE_END_MARK = ")"


def extract_sequence_name(sequence_prop: Optional[str]) -> Optional[str]:
    """``SEQ_MEMBER:dfcache(50)`` -> ``SEQ_MEMBER``; blank means no sequence."""
    if sequence_prop is None or not sequence_prop.strip():
        return None
    index = sequence_prop.rfind(SEQUENCE_HINT_MARK)
    if index < 0:
        return sequence_prop
    sequence_name = sequence_prop[:index]
    if not sequence_name.strip():
        return None
    return sequence_name


def split_sub_column_key(key: str) -> Tuple[str, str]:
    """``TABLE.COLUMN`` -> ``("TABLE", "COLUMN")``, split at the first dot."""
    table_name, _, column_name = key.partition(SUB_COLUMN_DELIMITER)
    return table_name, column_name


class SequenceIdentityProperties(AbstractProperties):
    """Sequence and identity definitions, both keyed by case-insensitive table names."""

    group_name = "sequenceDefinitionMap"

    def __init__(self, tree: ValueNode = ABSENT):
        self.identity_group = PropertyGroup.of(tree, IDENTITY_GROUP_NAME)
        super().__init__(tree)

    def _build(self) -> None:
        raw_map = self.accessor.string_map(self.mapping)
        table_sequences: Dict[str, str] = {}
        sub_column_sequences: Dict[str, str] = {}
        for key, sequence_prop in raw_map.items():
            if SUB_COLUMN_DELIMITER in key:
                sub_column_sequences[key] = sequence_prop
            else:
                table_sequences[key] = sequence_prop

        for key, sequence_prop in sub_column_sequences.items():
            if sequence_prop.strip() and SEQUENCE_HINT_MARK in sequence_prop:
                raise DomainInvariantError(
                    "Sequence hint for sub-column sequence is unsupported.",
                    items=[("Sub-column", key), ("Sequence", sequence_prop)],
                    advice=["Remove the ':' hint from the sub-column sequence."],
                )

        self._sequence_definition_map = FlexibleMap(table_sequences)
        self._sub_column_sequence_definition_map = FlexibleMap(sub_column_sequences)

        identity_accessor = TypedAccessor(IDENTITY_GROUP_NAME)
        self._identity_definition_map = FlexibleMap(
            identity_accessor.string_map(self.identity_group.mapping)
        )
        logger.debug(
            "Resolved sequence definitions",
            sequences=len(table_sequences),
            sub_column_sequences=len(sub_column_sequences),
            identities=len(self._identity_definition_map),
        )

    # ------------------------------------------------------------------
    # Sequences
    # ------------------------------------------------------------------
    @property
    def sequence_definition_map(self) -> FlexibleMap:
        return self._sequence_definition_map

    @property
    def sub_column_sequence_definition_map(self) -> FlexibleMap:
        return self._sub_column_sequence_definition_map

    def table_sequence_map(self) -> Dict[str, Optional[str]]:
        """Table name -> sequence name, hints removed."""
        return {
            table_name: self.find_sequence_name(table_name)
            for table_name in self._sequence_definition_map
        }

    def find_sequence_name(self, table_name: str) -> Optional[str]:
        return extract_sequence_name(self._sequence_definition_map.get(table_name))

    def find_sequence_prop(self, table_name: str) -> Optional[str]:
        sequence_prop = self._sequence_definition_map.get(table_name)
        if sequence_prop is None or not sequence_prop.strip():
            return None
        return sequence_prop

    def find_sequence_cache_size(self, table_name: str) -> Optional[int]:
        """Cache size from a ``:dfcache(N)`` hint, if one is written.

        Raises:
            DomainInvariantError: If the hint is unterminated or not an integer
        """
        sequence_prop = self.find_sequence_prop(table_name)
        if sequence_prop is None:
            return None
        index = sequence_prop.rfind(SEQUENCE_HINT_MARK)
        if index < 0:
            return None
        hint = sequence_prop[index + len(SEQUENCE_HINT_MARK) :].strip()
        cache_index = hint.find(CACHE_MARK)
        if cache_index < 0:
            return None
        cache_value = hint[cache_index + len(CACHE_MARK) :].strip()
        end_index = cache_value.find(CACHE_END_MARK)
        if end_index < 0:
            raise DomainInvariantError(
                "The cache size setting needs end mark ')'.",
                items=[("Table", table_name), ("Sequence", sequence_prop)],
            )
        cache_size_prop = cache_value[:end_index].strip()
        if not cache_size_prop:
            return None
        try:
            return int(cache_size_prop)
        except ValueError as e:
            raise DomainInvariantError(
                "The cache size of the sequence should be an integer.",
                items=[("Table", table_name), ("Sequence", sequence_prop)],
            ) from e

    def has_sub_column_sequence(self) -> bool:
        return len(self._sub_column_sequence_definition_map) > 0

    def find_sub_column_sequence_name(self, table_name: str, column_name: str) -> Optional[str]:
        key = f"{table_name}{SUB_COLUMN_DELIMITER}{column_name}"
        return extract_sequence_name(self._sub_column_sequence_definition_map.get(key))

    # ------------------------------------------------------------------
    # Identities
    # ------------------------------------------------------------------
    @property
    def identity_definition_map(self) -> FlexibleMap:
        return self._identity_definition_map

    def find_identity_column_name(self, table_name: str) -> Optional[str]:
        return self._identity_definition_map.get(table_name)
