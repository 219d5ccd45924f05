"""
Definition Checks Against the Schema
====================================

Some property rules can only be checked once the schema is known: the
tables and columns named by additional keys, sequences and common columns
must exist. These checks run after the property groups are resolved.
"""

from .engine import DefinitionValidator, TableMeta

__all__ = ["DefinitionValidator", "TableMeta"]
