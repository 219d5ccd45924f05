"""Typed value tree for already-parsed property documents.

An external parser (or :func:`dfprop.utils.load_yaml_with_env`) produces plain
``str``/``dict``/``list`` data. :func:`from_python` turns that into an explicit
tagged union so every consumer checks shapes in one place:

* :class:`StringNode` - a scalar value, always text
* :class:`MappingNode` - insertion-ordered entries with unique keys
* :class:`SequenceNode` - ordered items
* :data:`ABSENT` - a missing or null value
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterator, List, Tuple, Union

from dfprop.exceptions import ConfigShapeError


@dataclass(frozen=True)
class StringNode:
    """Scalar text value."""

    value: str


@dataclass(frozen=True)
class SequenceNode:
    """Ordered sequence of nodes."""

    items: Tuple["ValueNode", ...] = ()

    def __iter__(self) -> Iterator["ValueNode"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class MappingNode:
    """Insertion-ordered key/value entries.

    Keys are whatever the parser produced. They are normally strings; shape
    checks reject anything else with the group/key context attached.
    """

    entries: Dict[Hashable, "ValueNode"] = field(default_factory=dict)

    def get(self, key: Hashable) -> "ValueNode":
        return self.entries.get(key, ABSENT)

    def keys(self) -> List[Hashable]:
        return list(self.entries.keys())

    def items(self) -> List[Tuple[Hashable, "ValueNode"]]:
        return list(self.entries.items())

    def __contains__(self, key: Hashable) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class AbsentNode:
    """Missing or null value. Use the :data:`ABSENT` singleton."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = AbsentNode()

ValueNode = Union[StringNode, MappingNode, SequenceNode, AbsentNode]

EMPTY_MAPPING = MappingNode()


def node_kind(value: Any) -> str:
    """Name the shape of a node (or of a raw Python value) for diagnostics."""
    if isinstance(value, StringNode):
        return "String"
    if isinstance(value, MappingNode):
        return "Mapping"
    if isinstance(value, SequenceNode):
        return "Sequence"
    if value is None or isinstance(value, AbsentNode):
        return "Absent"
    return type(value).__name__


def from_python(data: Any, subject: str = "tree", path: Tuple[str, ...] = ()) -> ValueNode:
    """Convert plain parsed data into a :data:`ValueNode` tree.

    Args:
        data: ``str``, ``dict``, ``list``/``tuple``, ``None`` or an existing node
        subject: Name used in error messages
        path: Key path of ``data`` inside the document

    Returns:
        The converted node

    Raises:
        ConfigShapeError: If a value is not text, mapping, sequence or null
    """
    if isinstance(data, (StringNode, MappingNode, SequenceNode, AbsentNode)):
        return data
    if data is None:
        return ABSENT
    if isinstance(data, str):
        return StringNode(data)
    if isinstance(data, dict):
        entries: Dict[Hashable, ValueNode] = {}
        for key, value in data.items():
            entries[key] = from_python(value, subject, path + (str(key),))
        return MappingNode(entries)
    if isinstance(data, (list, tuple)):
        return SequenceNode(
            tuple(
                from_python(item, subject, path + (f"[{index}]",))
                for index, item in enumerate(data)
            )
        )
    raise ConfigShapeError(
        subject,
        list(path),
        type(data).__name__,
        data,
        expected_type="String, Mapping or Sequence",
        message="The parsed value cannot be represented in a property tree.",
    )


def to_python(node: ValueNode) -> Any:
    """Convert a node back into plain Python data."""
    if isinstance(node, StringNode):
        return node.value
    if isinstance(node, MappingNode):
        return {key: to_python(value) for key, value in node.items()}
    if isinstance(node, SequenceNode):
        return [to_python(item) for item in node]
    return None


@dataclass(frozen=True)
class PropertyGroup:
    """A named property group and its root node."""

    name: str
    root: ValueNode = ABSENT

    @classmethod
    def of(cls, tree: ValueNode, name: str) -> "PropertyGroup":
        """Select the group ``name`` from a document root (absent if missing)."""
        if isinstance(tree, MappingNode):
            return cls(name, tree.get(name))
        if isinstance(tree, AbsentNode):
            return cls(name, ABSENT)
        raise ConfigShapeError(
            "properties",
            [],
            node_kind(tree),
            to_python(tree),
            expected_type="Mapping",
            message="The property document root should be a Mapping.",
        )

    @property
    def mapping(self) -> MappingNode:
        """Root as a mapping; an absent group is an empty mapping."""
        if isinstance(self.root, AbsentNode):
            return EMPTY_MAPPING
        if not isinstance(self.root, MappingNode):
            raise ConfigShapeError(
                self.name,
                [],
                node_kind(self.root),
                to_python(self.root),
                expected_type="Mapping",
                message="The property group should be a Mapping.",
            )
        return self.root
