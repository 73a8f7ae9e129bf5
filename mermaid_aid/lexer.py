"""Tokenizer for the compact diagram notation."""

from __future__ import annotations

from .constants import (
    COMMENT_MARKER,
    DECISION_SHORTHAND,
    IDENTIFIER_CHARS,
    IDENTIFIER_START_CHARS,
    KEYWORDS,
    MULTI_CHAR_TOKENS,
    QUOTE_CHARS,
    SINGLE_CHAR_TOKENS,
)
from .exceptions import UnterminatedLiteralError
from .models import ScannerContext, Token, TokenKind


def _advance(ctx: ScannerContext, count: int = 1) -> None:
    """Move past `count` characters, keeping line and column in sync.

    Args:
        ctx: Scanner context to update.
        count: Number of characters to consume.
    """
    for character in ctx.text[ctx.position : ctx.position + count]:
        if character == "\n":
            ctx.line += 1
            ctx.column = 1
        else:
            ctx.column += 1
    ctx.position += count


def _emit(ctx: ScannerContext, kind: TokenKind, text: str, length: int | None = None) -> None:
    """Append a token starting at the current position and consume it.

    Args:
        ctx: Scanner context to update.
        kind: Token category.
        text: Token text.
        length: Number of source characters the token spans; defaults to
            ``len(text)``.
    """
    ctx.tokens.append(Token(kind, text, ctx.line, ctx.column))
    _advance(ctx, len(text) if length is None else length)


def _try_skip_whitespace(ctx: ScannerContext) -> bool:
    """Skip a run of whitespace other than newlines.

    Returns:
        bool: True when at least one character was skipped.
    """
    start = ctx.position
    while ctx.position < len(ctx.text):
        character = ctx.text[ctx.position]
        if character == "\n" or not character.isspace():
            break
        _advance(ctx)
    return ctx.position > start


def _try_skip_comment(ctx: ScannerContext) -> bool:
    """Skip a ``//`` comment up to, but not including, the end of the line.

    Returns:
        bool: True when a comment was skipped.

    Examples:
        _try_skip_comment(ScannerContext("// note\\nflow"))  # True, stops at "\\n"
    """
    if not ctx.text.startswith(COMMENT_MARKER, ctx.position):
        return False

    end = ctx.text.find("\n", ctx.position)
    if end == -1:
        end = len(ctx.text)
    _advance(ctx, end - ctx.position)
    return True


def _try_read_newline(ctx: ScannerContext) -> bool:
    if ctx.text[ctx.position] != "\n":
        return False

    _emit(ctx, TokenKind.NEWLINE, "\n")
    return True


def _try_read_string(ctx: ScannerContext) -> bool:
    """Read a quoted literal verbatim up to the matching close quote.

    Literals may span lines and have no escape sequences.

    Returns:
        bool: True when a literal was read.

    Raises:
        UnterminatedLiteralError: If the input ends before the close quote.
    """
    quote = ctx.text[ctx.position]
    if quote not in QUOTE_CHARS:
        return False

    end = ctx.text.find(quote, ctx.position + 1)
    if end == -1:
        raise UnterminatedLiteralError(ctx.line, ctx.column, quote)

    value = ctx.text[ctx.position + 1 : end]
    _emit(ctx, TokenKind.STRING, value, length=end - ctx.position + 1)
    return True


def _try_read_multi_char(ctx: ScannerContext) -> bool:
    """Read connectors and the ``<>`` decision symbol.

    Returns:
        bool: True when a multi-character token was read.

    Examples:
        _try_read_multi_char(ScannerContext("<-> b"))  # True, BIDIRECTIONAL
    """
    for lexeme, kind in MULTI_CHAR_TOKENS:
        if ctx.text.startswith(lexeme, ctx.position):
            _emit(ctx, kind, lexeme)
            return True
    return False


def _try_read_decision_shorthand(ctx: ScannerContext) -> bool:
    """Read ``?`` as a decision symbol when it opens a word.

    The shorthand only counts at the very start of the input or right after a
    whitespace character; elsewhere (``Valid?``) it is left for the caller to
    discard.

    Returns:
        bool: True when a decision symbol was read.

    Examples:
        _try_read_decision_shorthand(ScannerContext("? check"))  # True
        _try_read_decision_shorthand(ScannerContext("ok?", position=2))  # False
    """
    if ctx.text[ctx.position] != DECISION_SHORTHAND:
        return False

    if ctx.position > 0 and not ctx.text[ctx.position - 1].isspace():
        return False

    _emit(ctx, TokenKind.DECISION_SYMBOL, DECISION_SHORTHAND)
    return True


def _try_read_single_char(ctx: ScannerContext) -> bool:
    kind = SINGLE_CHAR_TOKENS.get(ctx.text[ctx.position])
    if kind is None:
        return False

    _emit(ctx, kind, ctx.text[ctx.position])
    return True


def _try_read_identifier(ctx: ScannerContext) -> bool:
    """Read an identifier run and classify keywords case-insensitively.

    Returns:
        bool: True when an identifier or keyword was read.

    Examples:
        _try_read_identifier(ScannerContext("Flow"))  # True, FLOW
        _try_read_identifier(ScannerContext("user_1"))  # True, IDENTIFIER
    """
    if ctx.text[ctx.position] not in IDENTIFIER_START_CHARS:
        return False

    end = ctx.position + 1
    while end < len(ctx.text) and ctx.text[end] in IDENTIFIER_CHARS:
        end += 1

    word = ctx.text[ctx.position : end]
    _emit(ctx, KEYWORDS.get(word.lower(), TokenKind.IDENTIFIER), word)
    return True


def tokenize(text: str) -> list[Token]:
    """Convert compact diagram notation into classified tokens.

    Whitespace and ``//`` comments produce no tokens; newlines are kept as
    statement boundaries. Characters that belong to no token class are
    discarded silently.

    Args:
        text: Source text in compact diagram notation.

    Returns:
        list[Token]: Tokens in source order, always terminated by an ``EOF``
            token.

    Raises:
        UnterminatedLiteralError: If a quoted literal is never closed.

    Examples:
        tokenize("seq\\nuser -> app: login")
    """
    ctx = ScannerContext(text=text)

    while ctx.position < len(text):
        if _try_skip_whitespace(ctx):
            continue

        if _try_skip_comment(ctx):
            continue

        if _try_read_newline(ctx):
            continue

        if _try_read_string(ctx):
            continue

        if _try_read_multi_char(ctx):
            continue

        if _try_read_decision_shorthand(ctx):
            continue

        if _try_read_single_char(ctx):
            continue

        if _try_read_identifier(ctx):
            continue

        # Unknown characters are dropped
        _advance(ctx)

    ctx.tokens.append(Token(TokenKind.EOF, "", ctx.line, ctx.column))
    return ctx.tokens
