"""Record model for parsed pattern documentation.

A ``Pattern`` is built up field by field while a comment block is scanned,
and partial records sharing a name are combined with ``Pattern.merge``.

Example:
    from patterndoc.models import Pattern, PatternParameter

    pattern = Pattern(name="Button")
    pattern.add_parameter(PatternParameter(name="label", type="String"))
    pattern.append_meta("todo", "support icons")

    print(pattern.to_dict())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Union


# =============================================================================
# Metadata Values
# =============================================================================


@dataclass(frozen=True)
class ScalarMeta:
    """Single metadata value; a later value for the same key replaces it."""

    value: str

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class ListMeta:
    """Accumulating metadata value; merging concatenates the entries."""

    values: tuple[str, ...] = ()

    def append(self, value: str) -> "ListMeta":
        """Return a new ListMeta with ``value`` added at the end."""
        return ListMeta(self.values + (value,))

    def to_python(self) -> list[str]:
        return list(self.values)


MetaValue = Union[ScalarMeta, ListMeta]


def combine_meta(current: MetaValue | None, incoming: MetaValue) -> MetaValue:
    """Combine two values stored under the same metadata key.

    An incoming list is appended to the current value, promoting a scalar
    the way ``Pattern.append_meta`` does. An incoming scalar replaces
    whatever is there, as ``Pattern.set_meta`` does.
    """
    if isinstance(incoming, ListMeta):
        if isinstance(current, ListMeta):
            return ListMeta(current.values + incoming.values)
        if isinstance(current, ScalarMeta):
            return ListMeta((current.value,) + incoming.values)
    return incoming


# =============================================================================
# Record Types
# =============================================================================


@dataclass
class PatternParameter:
    """A parameter accepted by a pattern.

    Attributes:
        name: Parameter name
        type: Raw type annotation text (the content between the braces)
        description: Parameter description
        default_value: Default literal, or None when no default was given
        optional: Whether the name was written in brackets
    """

    name: str
    type: str = ""
    description: str = ""
    default_value: str | None = None
    optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "default_value": self.default_value,
            "optional": self.optional,
        }


@dataclass
class CodeBlock:
    """A fenced code block from an example.

    Attributes:
        code: De-indented code text without the fence lines
        syntax: Language tag after the opening fence, or None
    """

    code: str
    syntax: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "syntax": self.syntax,
            "code": self.code,
        }


@dataclass
class PatternExample:
    """A usage example with one or more code blocks."""

    description: str = ""
    code_blocks: list[CodeBlock] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "description": self.description,
            "code_blocks": [block.to_dict() for block in self.code_blocks],
        }


@dataclass
class Pattern:
    """A documented pattern.

    Attributes:
        name: Pattern name from the ``@pattern`` tag
        description: Description text
        parameters: Parameters in declaration order
        examples: Examples in declaration order
        metadata: Metadata keyed by name
    """

    name: str = ""
    description: str = ""
    parameters: list[PatternParameter] = field(default_factory=list)
    examples: list[PatternExample] = field(default_factory=list)
    metadata: dict[str, MetaValue] = field(default_factory=dict)

    def add_parameter(self, parameter: PatternParameter) -> None:
        self.parameters.append(parameter)

    def add_example(self, description: str, code_blocks: Iterable[CodeBlock]) -> None:
        self.examples.append(PatternExample(description, list(code_blocks)))

    def set_meta(self, key: str | None, value: str | None) -> None:
        """Set a scalar metadata value. A None key is a no-op."""
        if key is None or value is None:
            return
        self.metadata[key] = ScalarMeta(value)

    def append_meta(self, key: str | None, value: str | None) -> None:
        """Append to a list metadata value, converting a scalar if needed."""
        if key is None or value is None:
            return
        current = self.metadata.get(key)
        if isinstance(current, ListMeta):
            self.metadata[key] = current.append(value)
        elif isinstance(current, ScalarMeta):
            self.metadata[key] = ListMeta((current.value, value))
        else:
            self.metadata[key] = ListMeta((value,))

    def get_meta(self, key: str, default: Any = None) -> Any:
        """Get a metadata value as a plain string or list of strings."""
        value = self.metadata.get(key)
        if value is None:
            return default
        return value.to_python()

    @staticmethod
    def merge(patterns: Iterable["Pattern"]) -> list["Pattern"]:
        """Merge partial patterns that share a name.

        Groups are returned in first-seen order. Parameters and examples are
        concatenated in encounter order, the first non-empty description is
        kept, and metadata is combined with ``combine_meta``. The input
        patterns are left untouched.
        """
        merged: dict[str, Pattern] = {}

        for pattern in patterns:
            target = merged.get(pattern.name)
            if target is None:
                target = Pattern(name=pattern.name)
                merged[pattern.name] = target

            if not target.description and pattern.description:
                target.description = pattern.description
            target.parameters.extend(pattern.parameters)
            target.examples.extend(pattern.examples)
            for key, value in pattern.metadata.items():
                target.metadata[key] = combine_meta(target.metadata.get(key), value)

        return list(merged.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": [p.to_dict() for p in self.parameters],
            "examples": [e.to_dict() for e in self.examples],
            "metadata": {k: v.to_python() for k, v in self.metadata.items()},
        }
