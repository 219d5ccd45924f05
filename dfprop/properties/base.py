"""Base classes shared by every property group."""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from dfprop.accessor import TypedAccessor
from dfprop.exceptions import UnknownDefinitionError
from dfprop.tree import ABSENT, MappingNode, PropertyGroup, ValueNode
from dfprop.utils.logging import logger


class AbstractProperties:
    """A typed facade over one named subtree of the property document.

    Subclasses set ``group_name`` and resolve everything they need in
    ``_build()``, which runs once from the constructor. Instances are
    read-only afterwards.

    Args:
        tree: Root of the property document (group name -> group subtree)
    """

    group_name: str = ""

    def __init__(self, tree: ValueNode = ABSENT):
        self.group = PropertyGroup.of(tree, self.group_name)
        self.accessor = TypedAccessor(self.group_name)
        self._build()
        logger.debug("Resolved property group", group=self.group_name)

    @property
    def mapping(self) -> MappingNode:
        return self.group.mapping

    def _build(self) -> None:
        pass


class NamedDefinitionProperties(AbstractProperties):
    """A group of ``name -> {attribute: value}`` definitions.

    The whole group is validated with the two-level shape check on build;
    finders then look attributes up by definition name and fail loudly for
    names that were never defined.
    """

    definition_title: str = "definition"

    def _build(self) -> None:
        validated = self.accessor.validate_two_level(self.mapping)
        self._definition_map: Dict[str, Mapping[str, str]] = {
            name: MappingProxyType(attributes) for name, attributes in validated.items()
        }

    @property
    def definition_map(self) -> Mapping[str, Mapping[str, str]]:
        return MappingProxyType(self._definition_map)

    def definition_names(self) -> List[str]:
        return list(self._definition_map.keys())

    def has_definition(self, name: str) -> bool:
        return name in self._definition_map

    def _find_attribute_map(self, name: str, option_key: str) -> Mapping[str, str]:
        attributes = self._definition_map.get(name)
        if attributes is None:
            raise UnknownDefinitionError(
                self.definition_title,
                name,
                option=option_key,
                available=self.definition_names(),
            )
        return attributes

    def _find_attribute_value(self, name: str, option_key: str) -> Optional[str]:
        """Raw attribute value of a definition; ``None`` if the attribute is unset.

        Raises:
            UnknownDefinitionError: If ``name`` is not defined in the group
        """
        return self._find_attribute_map(name, option_key).get(option_key)

    def _find_trimmed_value(self, name: str, option_key: str) -> Optional[str]:
        value = self._find_attribute_value(name, option_key)
        if value is None or not value.strip():
            return None
        return value.strip()

    def _find_flag(self, name: str, option_key: str) -> bool:
        value = self._find_attribute_value(name, option_key)
        return value is not None and value.strip().lower() == "true"
