"""
heading-decorator: computed numbering for Markdown headings.

This package can be used both as a CLI tool and as a library. Labels are
computed from the document text and never written back to it.

CLI Usage:
    heading-decorator README.md

Library Usage:
    from heading_decorator import DecoratorSettings, TextDocument, create_counter
    from heading_decorator import iter_heading_levels

    document = TextDocument(Path("README.md").read_text())
    counter = create_counter(DecoratorSettings(), document)
    for line_index, level in iter_heading_levels(document):
        counter.handler(level)
        print(counter.decorator(level), document.line_text(line_index))
"""

from .config import (
    ConfigError,
    DecoratorSettings,
    HeadingConfig,
    IndependentSettings,
    LevelDecoratorSettings,
    SpliceLevelSettings,
    SpliceSettings,
    build_config,
    load_config,
)
from .counter import (
    IndependentCounter,
    OrderedCounter,
    Querier,
    SpliceCounter,
    UnorderedCounter,
)
from .exceptions import DocumentReadError, FileTooLargeError, HeadingDecoratorError
from .factory import Document, TextDocument, create_counter, iter_heading_levels
from .heading import Heading
from .models import (
    CounterStyle,
    CustomIdentStyle,
    DecoratedHeading,
    DecoratorMode,
    Position,
    SpecifiedStringStyle,
    StyleDescriptor,
)
from .render import decorate_document, decorate_text, render_line

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "Heading",
    "Querier",
    "OrderedCounter",
    "IndependentCounter",
    "SpliceCounter",
    "UnorderedCounter",
    "create_counter",
    "iter_heading_levels",
    "decorate_document",
    "decorate_text",
    "render_line",
    # Data models
    "Document",
    "TextDocument",
    "DecoratedHeading",
    "DecoratorMode",
    "Position",
    "CounterStyle",
    "CustomIdentStyle",
    "SpecifiedStringStyle",
    "StyleDescriptor",
    # Configuration
    "DecoratorSettings",
    "IndependentSettings",
    "LevelDecoratorSettings",
    "SpliceSettings",
    "SpliceLevelSettings",
    "HeadingConfig",
    "build_config",
    "load_config",
    # Exceptions
    "ConfigError",
    "DocumentReadError",
    "FileTooLargeError",
    "HeadingDecoratorError",
    # Version
    "__version__",
]
