"""Custom exceptions for dfprop property resolution."""

from typing import Any, List, Optional


def _type_title(value: Any) -> str:
    """Readable runtime type name of a property value."""
    from dfprop.tree import node_kind

    return node_kind(value)


class DfpropException(Exception):
    """Base exception for all dfprop errors."""

    pass


class ConfigShapeError(DfpropException):
    """A property value has the wrong runtime shape."""

    def __init__(
        self,
        subject: str,
        path: List[str],
        actual_type: str,
        actual_value: Any,
        expected_type: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.subject = subject
        self.path = list(path)
        self.actual_type = actual_type
        self.actual_value = actual_value
        self.expected_type = expected_type
        self.message = message or "The property value has an unexpected type."
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        """Format shape error with group/key context."""
        parts = [f"✗ {self.message}"]
        parts.append("\n\n  Advice:")
        if self.expected_type:
            parts.append(f"\n    The value should be {self.expected_type}.")
        parts.append("\n    Check the property definition and its nesting.")
        parts.append(f"\n\n  Group: {self.subject}")
        if self.path:
            parts.append(f"\n  Key: {' > '.join(self.path)}")
        parts.append(f"\n  Actual Type: {self.actual_type}")
        parts.append(f"\n  Actual Value: {self.actual_value!r}")
        return "".join(parts)


class MissingRequiredError(ConfigShapeError):
    """A required property is absent or blank."""

    def __init__(self, subject: str, key: str, actual_value: Any = None):
        super().__init__(
            subject,
            [key],
            _type_title(actual_value),
            actual_value,
            expected_type="a non-blank String",
            message=f"The property '{key}' is required.",
        )
        self.key = key


class UnknownDefinitionError(DfpropException):
    """A lookup by logical name found no definition."""

    def __init__(
        self,
        subject: str,
        name: str,
        option: Optional[str] = None,
        available: Optional[List[str]] = None,
    ):
        self.subject = subject
        self.name = name
        self.option = option
        self.available = list(available) if available is not None else None
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        """Format lookup error with the requested name."""
        parts = [f"✗ Unknown name of {self.subject}: {self.name}"]
        if self.option:
            parts.append(f"\n  Option: {self.option}")
        if self.available is not None:
            listed = ", ".join(self.available) if self.available else "none"
            parts.append(f"\n  Defined names: {listed}")
        return "".join(parts)


class DomainInvariantError(DfpropException):
    """A cross-cutting property rule is violated."""

    def __init__(
        self,
        message: str,
        items: Optional[List[tuple]] = None,
        advice: Optional[List[str]] = None,
    ):
        self.message = message
        self.items = list(items or [])
        self.advice = list(advice or [])
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        """Format invariant error with advice and offending items."""
        parts = [f"✗ {self.message}"]

        if self.advice:
            parts.append("\n\n  Advice:")
            for line in self.advice:
                parts.append(f"\n    {line}")

        for title, value in self.items:
            parts.append(f"\n\n  {title}:")
            if isinstance(value, (list, tuple)):
                for element in value:
                    parts.append(f"\n    • {element}")
            else:
                parts.append(f"\n    {value}")

        return "".join(parts)
