"""patterndoc - Extract pattern documentation from tagged comment blocks."""

from patterndoc.api import parse, parse_file, parse_files
from patterndoc.config import ParserConfig
from patterndoc.errors import (
    ConfigError,
    CursorExhaustedError,
    MalformedParameterError,
    PatternDocError,
)
from patterndoc.fields import FieldKind
from patterndoc.models import (
    CodeBlock,
    ListMeta,
    MetaValue,
    Pattern,
    PatternExample,
    PatternParameter,
    ScalarMeta,
)
from patterndoc.parser import PatternDocParser

# Version: Single source of truth from pyproject.toml
try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("patterndoc")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = [
    # API
    "parse",
    "parse_file",
    "parse_files",
    "PatternDocParser",
    "FieldKind",
    "ParserConfig",
    # Records
    "Pattern",
    "PatternParameter",
    "PatternExample",
    "CodeBlock",
    "MetaValue",
    "ScalarMeta",
    "ListMeta",
    # Errors
    "PatternDocError",
    "MalformedParameterError",
    "CursorExhaustedError",
    "ConfigError",
]
