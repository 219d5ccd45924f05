"""Eager resolution of every property group from one property document."""

from typing import Any, Dict, Optional

from dfprop.config import LoggingConfig
from dfprop.fixed_condition import DEFAULT_QUERY_MARKS, FixedConditionResolver, QueryMarks
from dfprop.properties import (
    AbstractProperties,
    AdditionalForeignKeyProperties,
    AdditionalNotNullProperties,
    AdditionalPrimaryKeyProperties,
    AdditionalUniqueKeyProperties,
    BasicProperties,
    CommonColumnProperties,
    DatabaseProperties,
    DocumentProperties,
    LittleAdjustmentProperties,
    MultipleFKPropertyProperties,
    OptimisticLockProperties,
    SequenceIdentityProperties,
    TypeMappingProperties,
)
from dfprop.properties.sequence_identity import IDENTITY_GROUP_NAME
from dfprop.tree import MappingNode, ValueNode, from_python
from dfprop.utils.config_loader import load_yaml_with_env
from dfprop.utils.logging import configure_logging, logger

KEY_LOGGING = "logging"


class PropertiesHandler:
    """All property groups of one generation run.

    Every group is resolved in the constructor, in dependency order: the
    basic and little-adjustment groups first, because the target language and
    the temporal mode shape the type mapping and the common column logic.
    Any shape or rule violation surfaces here, before generation starts.

    Args:
        tree: Root of the property document (group name -> group subtree)
        query_marks: Alias marks used when resolving fixed conditions

    Example:
        >>> handler = PropertiesHandler.from_python({
        ...     "basicInfoMap": {"project": "maihamadb", "database": "mysql"},
        ... })
        >>> handler.type_mapping.find_native_type("VARCHAR")
        'String'
    """

    def __init__(self, tree: ValueNode, query_marks: QueryMarks = DEFAULT_QUERY_MARKS):
        logger.debug("Building property groups")

        self.basic = BasicProperties(tree)
        self.little_adjustment = LittleAdjustmentProperties(tree)
        self.database = DatabaseProperties(tree)
        self.document = DocumentProperties(
            tree, project_name=self.basic.project_name, database_url=self.database.url
        )
        self.type_mapping = TypeMappingProperties(
            tree,
            language_type_mapping=self.basic.language_type_mapping,
            temporal_mode=self.little_adjustment.temporal_mode,
        )
        self.additional_foreign_key = AdditionalForeignKeyProperties(
            tree, fixed_condition_resolver=FixedConditionResolver(query_marks)
        )
        self.additional_primary_key = AdditionalPrimaryKeyProperties(tree)
        self.additional_unique_key = AdditionalUniqueKeyProperties(tree)
        self.multiple_fk_property = MultipleFKPropertyProperties(tree)
        self.optimistic_lock = OptimisticLockProperties(tree)
        self.common_column = CommonColumnProperties(
            tree,
            base_common_package=self.basic.info.base_common_package,
            access_context_fqcn=self.basic.access_context_fqcn,
            temporal_mode=self.little_adjustment.temporal_mode,
        )
        self.sequence_identity = SequenceIdentityProperties(tree)
        self.additional_not_null = AdditionalNotNullProperties(tree)
        self._warn_unknown_groups(tree)

        logger.info(
            "Property groups resolved",
            project=self.basic.project_name,
            database=self.basic.target_database,
            language=self.basic.target_language,
            temporal_mode=self.little_adjustment.temporal_mode.value,
            additional_foreign_keys=len(self.additional_foreign_key.definition_names()),
        )

    @classmethod
    def from_python(
        cls, data: Dict[str, Any], query_marks: QueryMarks = DEFAULT_QUERY_MARKS
    ) -> "PropertiesHandler":
        """Build from plain ``dict``/``list``/``str`` data, e.g. a parsed dfprop file."""
        return cls(from_python(data, subject="properties"), query_marks=query_marks)

    @classmethod
    def from_yaml(cls, yaml_path: str, env: Optional[str] = None) -> "PropertiesHandler":
        """Build from a YAML property document.

        A top-level ``logging`` block configures logging before the groups are
        resolved and is not treated as a property group.

        Args:
            yaml_path: Path to the YAML document
            env: Environment name to apply overrides (e.g. 'prod')
        """
        data = load_yaml_with_env(yaml_path, env=env)
        logging_block = data.pop(KEY_LOGGING, None)
        if logging_block is not None:
            logging_config = LoggingConfig(**logging_block)
            configure_logging(logging_config.structured, logging_config.level.value)
        return cls.from_python(data)

    def groups(self) -> Dict[str, AbstractProperties]:
        """Resolved groups keyed by their group name in the document."""
        resolved = [
            self.basic,
            self.database,
            self.little_adjustment,
            self.document,
            self.type_mapping,
            self.additional_foreign_key,
            self.additional_primary_key,
            self.additional_unique_key,
            self.multiple_fk_property,
            self.optimistic_lock,
            self.common_column,
            self.sequence_identity,
            self.additional_not_null,
        ]
        return {group.group_name: group for group in resolved}

    def _warn_unknown_groups(self, tree: ValueNode) -> None:
        if not isinstance(tree, MappingNode):
            return
        known = set(self.groups()) | {IDENTITY_GROUP_NAME}
        unknown = [str(key) for key in tree.keys() if key not in known]
        if unknown:
            logger.warning("Ignoring unknown property groups", groups=unknown)


def load_properties_from_file(path: str, env: Optional[str] = None) -> PropertiesHandler:
    """Load a YAML property document and resolve every group.

    Args:
        path: Path to YAML file
        env: Environment name for overrides

    Returns:
        Fully built PropertiesHandler

    Raises:
        FileNotFoundError: If the file or an import is missing
        ConfigShapeError: If a value has the wrong shape
        DomainInvariantError: If a self-contained rule is violated
    """
    return PropertiesHandler.from_yaml(path, env=env)
