"""Data models for mermaid-aid."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class TokenKind(Enum):
    """Token categories produced by the tokenizer.

    Attributes:
        FLOWCHART, FLOW, SEQUENCE, SEQ, CLASS: Dialect keywords.
        START, END, DECISION, PROCESS: Node-kind keywords.
        START_SYMBOL, END_SYMBOL, DECISION_SYMBOL, PROCESS_SYMBOL: Node-kind
            shorthands (``@``, ``!``, ``?``, ``□`` and their variants).
        ARROW: Unidirectional connector ``->``.
        BIDIRECTIONAL: Bidirectional connector ``--`` or ``<->``.
        STRING: Quoted literal; the token text excludes the quotes.
        IDENTIFIER: Bare word that is not a keyword.
        NEWLINE: Statement boundary.
        EOF: End of input.
    """

    # Dialects
    FLOWCHART = auto()
    FLOW = auto()
    SEQUENCE = auto()
    SEQ = auto()
    CLASS = auto()

    # Node kinds
    START = auto()
    END = auto()
    DECISION = auto()
    PROCESS = auto()
    START_SYMBOL = auto()
    END_SYMBOL = auto()
    DECISION_SYMBOL = auto()
    PROCESS_SYMBOL = auto()

    # Connectors
    ARROW = auto()
    BIDIRECTIONAL = auto()

    # Punctuation
    COLON = auto()
    SEMICOLON = auto()
    PIPE = auto()
    BRACKET_OPEN = auto()
    BRACKET_CLOSE = auto()
    PARENTHESES_OPEN = auto()
    PARENTHESES_CLOSE = auto()

    # Literals
    STRING = auto()
    IDENTIFIER = auto()

    # Control
    NEWLINE = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A classified lexeme.

    Attributes:
        kind: Token category.
        text: Matched text (string tokens exclude their quotes).
        line: One-based line where the token starts.
        column: One-based column where the token starts.
    """

    kind: TokenKind
    text: str
    line: int
    column: int


@dataclass
class ScannerContext:
    """Encapsulate tokenizer state while walking source text.

    Attributes:
        text: Full source text.
        position: Zero-based index of the next character to scan.
        line: One-based line of the next character.
        column: One-based column of the next character.
        tokens: Tokens emitted so far.
    """

    text: str
    position: int = 0
    line: int = 1
    column: int = 1
    tokens: list[Token] = field(default_factory=list)


@dataclass
class TokenCursor:
    """Parse position over a token list terminated by ``EOF``.

    Attributes:
        tokens: Tokens being parsed.
        position: Zero-based index of the next token; saved and restored for
            lookahead.
    """

    tokens: list[Token]
    position: int = 0


class Dialect(Enum):
    """Supported diagram dialects."""

    FLOWCHART = "flowchart"
    SEQUENCE = "sequence"
    CLASS = "class"


class NodeKind(Enum):
    """Semantic category of a flowchart node."""

    START = "start"
    END = "end"
    DECISION = "decision"
    PROCESS = "process"


class Connector(Enum):
    """Relationship between two flowchart nodes."""

    ARROW = "arrow"
    BIDIRECTIONAL = "bidirectional"


@dataclass
class Edge:
    """One hop of a flowchart chain.

    Attributes:
        target: Identifier of the node the hop points to.
        label: Connection label, or None when absent.
        connector: Arrow style of the hop.
        target_kind: Kind written explicitly on the hop (``a -> ? b``), or
            None when the target was a bare identifier.
    """

    target: str
    label: str | None = None
    connector: Connector = Connector.ARROW
    target_kind: NodeKind | None = None


@dataclass
class FlowNode:
    """Flowchart node declaration, optionally carrying a chain of edges.

    Each edge's source is the previous edge's target; the first edge starts
    at ``id``.
    """

    kind: NodeKind
    id: str
    label: str | None = None
    outgoing: list[Edge] = field(default_factory=list)


@dataclass
class SequenceMessage:
    """A single message between two actors."""

    source: str
    target: str
    message: str


@dataclass
class ClassDeclaration:
    """A class box. Attributes and methods are never populated by the parser."""

    name: str
    attributes: list[str] = field(default_factory=list)
    methods: list[str] = field(default_factory=list)


Statement = FlowNode | SequenceMessage | ClassDeclaration


@dataclass
class DiagramTree:
    """Root of the syntax tree.

    Attributes:
        dialect: Dialect declared at the top of the input.
        statements: Statements in source order; all belong to ``dialect``.
    """

    dialect: Dialect
    statements: list[Statement] = field(default_factory=list)


@dataclass
class ResolvedNode:
    """Entry of the flowchart node table built during generation.

    Attributes:
        id: Node identifier.
        kind: Kind recorded on first sighting.
        label: Display label; None renders as the identifier.
    """

    id: str
    kind: NodeKind
    label: str | None = None
