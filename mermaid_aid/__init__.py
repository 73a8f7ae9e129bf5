"""
mermaid-aid: compact diagram notation to Mermaid translator.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    mermaid-aid login.mad -o login.mmd

Library Usage:
    from mermaid_aid import translate

    mermaid = translate("flow\\n@ start: Begin\\nstart -> done: finished")

    # or step by step
    from mermaid_aid import generate, parse, tokenize

    tree = parse(tokenize(source))
    mermaid = generate(tree)
"""

from .config import ConfigError, TranslatorConfig
from .exceptions import (
    DiagramSyntaxError,
    MissingTokenError,
    TranslationError,
    UnexpectedTokenError,
    UnsupportedDialectError,
    UnterminatedLiteralError,
    UnterminatedStringError,
)
from .generator import generate, infer_node_kind, resolve_flowchart
from .lexer import tokenize
from .models import (
    ClassDeclaration,
    Connector,
    DiagramTree,
    Dialect,
    Edge,
    FlowNode,
    NodeKind,
    ResolvedNode,
    SequenceMessage,
    Token,
    TokenKind,
)
from .parser import parse
from .translator import TranslateFileError, translate, translate_file

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "translate",
    "translate_file",
    "tokenize",
    "parse",
    "generate",
    "infer_node_kind",
    "resolve_flowchart",
    # Data models
    "ClassDeclaration",
    "Connector",
    "DiagramTree",
    "Dialect",
    "Edge",
    "FlowNode",
    "NodeKind",
    "ResolvedNode",
    "SequenceMessage",
    "Token",
    "TokenKind",
    # Configuration
    "TranslatorConfig",
    "ConfigError",
    # Exceptions
    "TranslationError",
    "UnterminatedLiteralError",
    "UnterminatedStringError",
    "DiagramSyntaxError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "UnsupportedDialectError",
    "TranslateFileError",
    # Version
    "__version__",
]
