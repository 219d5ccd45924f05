"""Typed property groups, one per top-level key of the property document."""

from .additional_foreign_key import AdditionalForeignKeyProperties
from .additional_key import AdditionalPrimaryKeyProperties, AdditionalUniqueKeyProperties
from .additional_not_null import AdditionalNotNullProperties
from .base import AbstractProperties, NamedDefinitionProperties
from .basic import BasicProperties
from .common_column import CommonColumnProperties
from .database import DatabaseProperties
from .document import DocumentProperties
from .little_adjustment import LittleAdjustmentProperties
from .multiple_fk_property import MultipleFKPropertyProperties
from .optimistic_lock import OptimisticLockProperties
from .sequence_identity import SequenceIdentityProperties
from .type_mapping import TypeMappingProperties

__all__ = [
    "AbstractProperties",
    "NamedDefinitionProperties",
    "BasicProperties",
    "DatabaseProperties",
    "LittleAdjustmentProperties",
    "DocumentProperties",
    "TypeMappingProperties",
    "AdditionalForeignKeyProperties",
    "AdditionalPrimaryKeyProperties",
    "AdditionalUniqueKeyProperties",
    "MultipleFKPropertyProperties",
    "OptimisticLockProperties",
    "CommonColumnProperties",
    "SequenceIdentityProperties",
    "AdditionalNotNullProperties",
]
