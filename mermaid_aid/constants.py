"""Constants used across the mermaid-aid package."""

from __future__ import annotations

import string

from .config import TranslatorConfig
from .models import Connector, Dialect, NodeKind, TokenKind

DEFAULT_CONFIG = TranslatorConfig()
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size

# Lexical classes
COMMENT_MARKER = "//"
QUOTE_CHARS = "\"'"
IDENTIFIER_START_CHARS = frozenset(string.ascii_letters + "_")
IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "_")

# Matched case-insensitively against whole identifier runs.
KEYWORDS = {
    "flowchart": TokenKind.FLOWCHART,
    "flow": TokenKind.FLOW,
    "sequence": TokenKind.SEQUENCE,
    "seq": TokenKind.SEQ,
    "class": TokenKind.CLASS,
    "start": TokenKind.START,
    "end": TokenKind.END,
    "decision": TokenKind.DECISION,
    "process": TokenKind.PROCESS,
}

# Longest match first.
MULTI_CHAR_TOKENS = (
    ("<->", TokenKind.BIDIRECTIONAL),
    ("->", TokenKind.ARROW),
    ("--", TokenKind.BIDIRECTIONAL),
    ("<>", TokenKind.DECISION_SYMBOL),
)

SINGLE_CHAR_TOKENS = {
    "@": TokenKind.START_SYMBOL,
    "○": TokenKind.START_SYMBOL,
    "!": TokenKind.END_SYMBOL,
    "●": TokenKind.END_SYMBOL,
    "□": TokenKind.PROCESS_SYMBOL,
    "|": TokenKind.PIPE,
    "[": TokenKind.BRACKET_OPEN,
    "]": TokenKind.BRACKET_CLOSE,
    "(": TokenKind.PARENTHESES_OPEN,
    ")": TokenKind.PARENTHESES_CLOSE,
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
}

# Only a decision symbol at input start or after whitespace.
DECISION_SHORTHAND = "?"

# Grammar classes
DIALECT_TOKENS = {
    TokenKind.FLOWCHART: Dialect.FLOWCHART,
    TokenKind.FLOW: Dialect.FLOWCHART,
    TokenKind.SEQUENCE: Dialect.SEQUENCE,
    TokenKind.SEQ: Dialect.SEQUENCE,
    TokenKind.CLASS: Dialect.CLASS,
}

NODE_SYMBOL_KINDS = {
    TokenKind.START_SYMBOL: NodeKind.START,
    TokenKind.END_SYMBOL: NodeKind.END,
    TokenKind.DECISION_SYMBOL: NodeKind.DECISION,
    TokenKind.PROCESS_SYMBOL: NodeKind.PROCESS,
}

NODE_KEYWORD_KINDS = {
    TokenKind.START: NodeKind.START,
    TokenKind.END: NodeKind.END,
    TokenKind.DECISION: NodeKind.DECISION,
    TokenKind.PROCESS: NodeKind.PROCESS,
}

CONNECTOR_TOKENS = {
    TokenKind.ARROW: Connector.ARROW,
    TokenKind.BIDIRECTIONAL: Connector.BIDIRECTIONAL,
}

# Tokens usable where a name is expected.
NAME_TOKENS = frozenset({TokenKind.IDENTIFIER, *NODE_KEYWORD_KINDS})

# Tokens joined into unquoted multi-word labels.
LABEL_WORD_TOKENS = frozenset({*NAME_TOKENS, *DIALECT_TOKENS})

STATEMENT_TERMINATORS = frozenset({TokenKind.NEWLINE, TokenKind.SEMICOLON, TokenKind.EOF})

# Node kind inference, checked in order.
INFERENCE_CUES = (
    (NodeKind.DECISION, ("?", "decide", "check", "valid", "choose", "if")),
    (NodeKind.START, ("start", "begin", "init", "launch", "open")),
    (NodeKind.END, ("end", "finish", "complete", "done", "success", "fail")),
)

# Mermaid output
FLOWCHART_HEADER = "flowchart"
SEQUENCE_HEADER = "sequenceDiagram"
CLASS_HEADER = "classDiagram"

NODE_TEMPLATES = {
    NodeKind.START: "{id}([{label}])",
    NodeKind.END: "{id}([{label}])",
    NodeKind.DECISION: "{id}{{{label}}}",
    NodeKind.PROCESS: "{id}[{label}]",
}

CONNECTOR_GLYPHS = {
    Connector.ARROW: "-->",
    Connector.BIDIRECTIONAL: "---",
}

# Labels containing any of these are wrapped in double quotes.
LABEL_SPECIAL_CHARS = frozenset('[](){}|"')
QUOTE_ENTITY = "#quot;"
