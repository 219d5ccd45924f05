"""Typed access to property mappings with strict shape checks.

Every property group reads its subtree through a :class:`TypedAccessor` bound to
the group name, so shape errors always carry the group and key path.
"""

from typing import Dict, Hashable, List, Optional, Sequence

from dfprop.exceptions import ConfigShapeError, MissingRequiredError
from dfprop.tree import (
    EMPTY_MAPPING,
    AbsentNode,
    MappingNode,
    SequenceNode,
    StringNode,
    ValueNode,
    node_kind,
    to_python,
)

SLASH_DELIMITER = "/"


def split_slash_list(text: Optional[str]) -> Optional[List[str]]:
    """Split ``"a/b/c"`` into ``["a", "b", "c"]``.

    Blank or missing input means "no value" and returns ``None`` rather than an
    empty list. Empty tokens between delimiters are skipped.
    """
    if text is None or not text.strip():
        return None
    return [token for token in text.split(SLASH_DELIMITER) if token]


def derive_boolean_another_key(key: str) -> Optional[str]:
    """Alternate spelling of an ``isXxx`` key, e.g. ``isPretty`` -> ``pretty``."""
    prefix = "is"
    if len(key) > len(prefix) and key.startswith(prefix) and key[len(prefix)].isupper():
        rest = key[len(prefix) :]
        return rest[0].lower() + rest[1:]
    return None


class TypedAccessor:
    """Typed getters over one property group's mappings.

    Args:
        group: Group name used in error messages
    """

    def __init__(self, group: str):
        self.group = group

    # ------------------------------------------------------------------
    # Shape checks
    # ------------------------------------------------------------------
    def shape_error(
        self,
        path: Sequence[Hashable],
        value: ValueNode,
        expected_type: str,
        message: Optional[str] = None,
    ) -> ConfigShapeError:
        """Build the shape error for ``value`` found at ``path``."""
        actual = value.value if isinstance(value, StringNode) else to_python(value)
        return ConfigShapeError(
            self.group,
            [str(p) for p in path],
            node_kind(value),
            actual,
            expected_type=expected_type,
            message=message or f"The value type should be {expected_type}.",
        )

    def expect_string(self, path: Sequence[Hashable], value: ValueNode) -> Optional[str]:
        """Raw string of ``value``; ``None`` when absent."""
        if isinstance(value, AbsentNode):
            return None
        if not isinstance(value, StringNode):
            raise self.shape_error(path, value, "String")
        return value.value

    def expect_key(self, path: Sequence[Hashable], key: Hashable) -> str:
        """Mapping key as a String; anything else is a shape error."""
        if not isinstance(key, str):
            raise ConfigShapeError(
                self.group,
                [str(p) for p in list(path) + [key]],
                type(key).__name__,
                key,
                expected_type="String",
                message="The key type should be String.",
            )
        return key

    def expect_mapping(self, path: Sequence[Hashable], value: ValueNode) -> MappingNode:
        if not isinstance(value, MappingNode):
            raise self.shape_error(path, value, "Mapping")
        return value

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------
    def require_string(self, mapping: MappingNode, key: str) -> str:
        """Trimmed value of a required key.

        Raises:
            MissingRequiredError: If absent or blank
            ConfigShapeError: If the value is not a String
        """
        raw = self.expect_string([key], mapping.get(key))
        if raw is None or not raw.strip():
            raise MissingRequiredError(self.group, key, raw)
        return raw.strip()

    def get_string(
        self, mapping: MappingNode, key: str, default: Optional[str] = None
    ) -> Optional[str]:
        """Trimmed value, or ``default`` if absent or blank."""
        raw = self.expect_string([key], mapping.get(key))
        if raw is None or not raw.strip():
            return default
        return raw.strip()

    def get_boolean(self, mapping: MappingNode, key: str, default: bool = False) -> bool:
        """Boolean property.

        Only a value equal to ``"true"`` (case-insensitive, trimmed) is true.
        Every other value, ``"false"`` included, falls back to ``default``.
        An absent ``isXxx`` key is also looked up as ``xxx``.
        """
        value = mapping.get(key)
        used_key = key
        if isinstance(value, AbsentNode):
            another_key = derive_boolean_another_key(key)
            if another_key is not None:
                value = mapping.get(another_key)
                used_key = another_key
        raw = self.expect_string([used_key], value)
        if raw is None or not raw.strip():
            return default
        if raw.strip().lower() == "true":
            return True
        return default

    def get_map(
        self, mapping: MappingNode, key: str, default: Optional[MappingNode] = None
    ) -> MappingNode:
        """Nested mapping under ``key``; ``default`` (empty) when absent."""
        value = mapping.get(key)
        if isinstance(value, AbsentNode):
            return default if default is not None else EMPTY_MAPPING
        return self.expect_mapping([key], value)

    def get_list(
        self, mapping: MappingNode, key: str, default: Optional[SequenceNode] = None
    ) -> SequenceNode:
        """Nested sequence under ``key``; ``default`` (empty) when absent."""
        value = mapping.get(key)
        if isinstance(value, AbsentNode):
            return default if default is not None else SequenceNode()
        if not isinstance(value, SequenceNode):
            raise self.shape_error([key], value, "Sequence")
        return value

    def get_string_list(self, mapping: MappingNode, key: str) -> List[str]:
        """Sequence of Strings under ``key``; blank items are skipped."""
        result = []
        for index, item in enumerate(self.get_list(mapping, key)):
            raw = self.expect_string([key, f"[{index}]"], item)
            if raw is not None and raw.strip():
                result.append(raw.strip())
        return result

    def get_slash_list(self, mapping: MappingNode, key: str) -> Optional[List[str]]:
        return split_slash_list(self.get_string(mapping, key))

    # ------------------------------------------------------------------
    # Structured maps
    # ------------------------------------------------------------------
    def string_map(
        self, mapping: MappingNode, path: Sequence[Hashable] = ()
    ) -> Dict[str, str]:
        """Flatten ``key -> String`` entries; absent values are dropped."""
        result: Dict[str, str] = {}
        for key, value in mapping.items():
            key = self.expect_key(path, key)
            entry_path = list(path) + [key]
            raw = self.expect_string(entry_path, value)
            if raw is None:
                continue
            result[key] = raw
        return result

    def validate_two_level(self, mapping: MappingNode) -> Dict[str, Dict[str, str]]:
        """Validate a ``name -> (attribute -> value)`` mapping.

        1. Every top-level value must be a Mapping.
        2. Every inner key must be a String; absent inner values are dropped;
           any other non-String inner value is rejected.

        Returns:
            Ordered ``name -> {attribute: value}`` dictionary

        Raises:
            ConfigShapeError: On the first entry with the wrong shape
        """
        result: Dict[str, Dict[str, str]] = {}
        for name, definition in mapping.items():
            name = self.expect_key([], name)
            inner = self.expect_mapping([name], definition)
            result[name] = self.string_map(inner, [name])
        return result
