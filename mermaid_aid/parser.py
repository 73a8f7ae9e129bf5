"""Structural parser for the compact diagram notation."""

from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn

from .constants import (
    CONNECTOR_TOKENS,
    DIALECT_TOKENS,
    LABEL_WORD_TOKENS,
    NAME_TOKENS,
    NODE_KEYWORD_KINDS,
    NODE_SYMBOL_KINDS,
    STATEMENT_TERMINATORS,
)
from .exceptions import MissingTokenError, UnexpectedTokenError
from .models import (
    ClassDeclaration,
    Dialect,
    DiagramTree,
    Edge,
    FlowNode,
    NodeKind,
    SequenceMessage,
    Statement,
    Token,
    TokenCursor,
    TokenKind,
)


def _peek(cursor: TokenCursor, offset: int = 0) -> Token:
    index = min(cursor.position + offset, len(cursor.tokens) - 1)
    return cursor.tokens[index]


def _advance(cursor: TokenCursor) -> Token:
    """Consume and return the current token; ``EOF`` is never consumed."""
    token = _peek(cursor)
    if token.kind is not TokenKind.EOF:
        cursor.position += 1
    return token


def _fail(cursor: TokenCursor, expected: str) -> NoReturn:
    """Raise the syntax error matching the current token.

    When the statement or input has already ended, the error points at the
    last token of the statement, so a dangling ``a ->`` reports the arrow.

    Raises:
        MissingTokenError: If the current token ends the statement or input.
        UnexpectedTokenError: If a token of another class is present.
    """
    token = _peek(cursor)
    if token.kind not in STATEMENT_TERMINATORS:
        raise UnexpectedTokenError(token, expected)

    if cursor.position > 0:
        previous = cursor.tokens[cursor.position - 1]
        if previous.kind not in STATEMENT_TERMINATORS:
            token = previous
    raise MissingTokenError(token, expected)


def _expect(cursor: TokenCursor, kind: TokenKind, expected: str) -> Token:
    if _peek(cursor).kind is not kind:
        _fail(cursor, expected)
    return _advance(cursor)


def _expect_name(cursor: TokenCursor, expected: str) -> str:
    """Consume a name; node-kind keywords count as plain names here."""
    if _peek(cursor).kind not in NAME_TOKENS:
        _fail(cursor, expected)
    return _advance(cursor).text


def _skip_separators(cursor: TokenCursor) -> None:
    while _peek(cursor).kind in (TokenKind.NEWLINE, TokenKind.SEMICOLON):
        _advance(cursor)


def _parse_text(cursor: TokenCursor, expected: str) -> str:
    """Read a quoted literal or a run of bare words joined by single spaces.

    Raises:
        MissingTokenError: If the statement ends before any text.
        UnexpectedTokenError: If the next token cannot start a label.

    Examples:
        # tokens for: try again
        _parse_text(cursor, "label")  # "try again"
    """
    token = _peek(cursor)
    if token.kind is TokenKind.STRING:
        return _advance(cursor).text

    if token.kind not in LABEL_WORD_TOKENS:
        _fail(cursor, expected)

    words = []
    while _peek(cursor).kind in LABEL_WORD_TOKENS:
        words.append(_advance(cursor).text)
    return " ".join(words)


def _parse_label(cursor: TokenCursor, required: bool) -> str | None:
    """Parse an optional ``: label`` suffix.

    Args:
        cursor: Token cursor positioned after a name.
        required: Whether text must follow a colon. Declarations accept a bare
            colon; edge and message labels do not.

    Returns:
        str | None: The label text, or None when there is no label.
    """
    if _peek(cursor).kind is not TokenKind.COLON:
        return None
    _advance(cursor)

    if not required and _peek(cursor).kind not in LABEL_WORD_TOKENS | {TokenKind.STRING}:
        return None
    return _parse_text(cursor, "label")


def _parse_dialect(cursor: TokenCursor) -> Dialect:
    _skip_separators(cursor)
    dialect = DIALECT_TOKENS.get(_peek(cursor).kind)
    if dialect is None:
        _fail(cursor, "diagram type (flowchart, sequence, class)")
    _advance(cursor)
    return dialect


def _starts_chain(cursor: TokenCursor) -> bool:
    """Probe whether the current name is followed by a connector.

    The cursor is always restored, so a standalone name is still available
    to the caller.
    """
    saved = cursor.position
    found = False
    if _peek(cursor).kind in NAME_TOKENS:
        _advance(cursor)
        found = _peek(cursor).kind in CONNECTOR_TOKENS
    cursor.position = saved
    return found


def _parse_explicit_kind(cursor: TokenCursor) -> NodeKind | None:
    """Consume a node-kind symbol, or a node-kind keyword followed by a name."""
    token = _peek(cursor)
    if token.kind in NODE_SYMBOL_KINDS:
        _advance(cursor)
        return NODE_SYMBOL_KINDS[token.kind]
    if token.kind in NODE_KEYWORD_KINDS and _peek(cursor, 1).kind in NAME_TOKENS:
        _advance(cursor)
        return NODE_KEYWORD_KINDS[token.kind]
    return None


def _parse_chain(cursor: TokenCursor) -> list[Edge]:
    """Parse ``-> target[: label]`` hops until no connector follows.

    Each hop may name its target's kind explicitly (``-> ? check`` or
    ``-> decision check``).
    """
    edges: list[Edge] = []
    while _peek(cursor).kind in CONNECTOR_TOKENS:
        connector = CONNECTOR_TOKENS[_advance(cursor).kind]
        target_kind = _parse_explicit_kind(cursor)
        target = _expect_name(cursor, "node name")
        label = _parse_label(cursor, required=True)
        edges.append(Edge(target, label, connector, target_kind))
    return edges


def _parse_flow_statement(cursor: TokenCursor) -> FlowNode:
    """Parse one flowchart statement.

    Recognized forms, first match wins:

    - ``@ id[: label]`` or ``start id[: label]``: explicit declaration, which
      may continue with a chain.
    - ``id -> id -> ...``: inline chain headed by a process node.
    - ``id[: label]``: process declaration, which may continue with a chain.
    """
    kind = _parse_explicit_kind(cursor)
    if kind is not None:
        node_id = _expect_name(cursor, "node name")
        label = _parse_label(cursor, required=False)
        return FlowNode(kind, node_id, label, _parse_chain(cursor))

    if _starts_chain(cursor):
        node_id = _expect_name(cursor, "node name")
        return FlowNode(NodeKind.PROCESS, node_id, outgoing=_parse_chain(cursor))

    node_id = _expect_name(cursor, "node declaration or connection")
    label = _parse_label(cursor, required=False)
    return FlowNode(NodeKind.PROCESS, node_id, label, _parse_chain(cursor))


def _parse_sequence_statement(cursor: TokenCursor) -> SequenceMessage:
    source = _expect_name(cursor, "actor name")
    _expect(cursor, TokenKind.ARROW, "'->'")
    target = _expect_name(cursor, "actor name")
    _expect(cursor, TokenKind.COLON, "':'")
    return SequenceMessage(source, target, _parse_text(cursor, "message"))


def _parse_class_statement(cursor: TokenCursor) -> ClassDeclaration:
    return ClassDeclaration(_expect_name(cursor, "class name"))


_STATEMENT_PARSERS: dict[Dialect, Callable[[TokenCursor], Statement]] = {
    Dialect.FLOWCHART: _parse_flow_statement,
    Dialect.SEQUENCE: _parse_sequence_statement,
    Dialect.CLASS: _parse_class_statement,
}


def parse(tokens: list[Token]) -> DiagramTree:
    """Build a diagram tree from a token list.

    The first non-blank token selects the dialect; every following statement
    is parsed with that dialect's grammar. Statements end at a newline, a
    semicolon, or the end of input.

    Args:
        tokens: Tokens produced by `tokenize`.

    Returns:
        DiagramTree: Dialect and statements in source order.

    Raises:
        MissingTokenError: If the input or a statement ends before a required
            token (for example ``flow\\nstart ->``).
        UnexpectedTokenError: If a token of the wrong class is found, including
            a missing or unknown diagram type.

    Examples:
        parse(tokenize("flow\\nA -> B -> C"))
    """
    if not tokens or tokens[-1].kind is not TokenKind.EOF:
        last = tokens[-1] if tokens else None
        eof = Token(TokenKind.EOF, "", last.line if last else 1, last.column if last else 1)
        tokens = [*tokens, eof]

    cursor = TokenCursor(tokens)
    dialect = _parse_dialect(cursor)
    parse_statement = _STATEMENT_PARSERS[dialect]

    statements: list[Statement] = []
    while True:
        _skip_separators(cursor)
        if _peek(cursor).kind is TokenKind.EOF:
            break

        statements.append(parse_statement(cursor))

        if _peek(cursor).kind not in STATEMENT_TERMINATORS:
            raise UnexpectedTokenError(_peek(cursor), "end of statement")

    return DiagramTree(dialect, statements)
