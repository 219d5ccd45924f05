"""DFPROP - Typed, validated access to code generator property documents."""

__version__ = "1.0.0"

from dfprop.exceptions import (
    ConfigShapeError,
    DfpropException,
    DomainInvariantError,
    MissingRequiredError,
    UnknownDefinitionError,
)
from dfprop.flexible import FlexibleMap
from dfprop.handler import PropertiesHandler, load_properties_from_file
from dfprop.tree import from_python

__all__ = [
    "PropertiesHandler",
    "load_properties_from_file",
    "from_python",
    "FlexibleMap",
    "DfpropException",
    "ConfigShapeError",
    "MissingRequiredError",
    "UnknownDefinitionError",
    "DomainInvariantError",
    "__version__",
]


# Schema checks are loaded on first use
def __getattr__(name):
    if name == "DefinitionValidator":
        from dfprop.validation import DefinitionValidator

        return DefinitionValidator
    if name == "TableMeta":
        from dfprop.validation import TableMeta

        return TableMeta
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
