"""End-to-end translation from compact notation to Mermaid."""

from __future__ import annotations

from pathlib import Path

from .config import ConfigError, TranslatorConfig, validate_config
from .exceptions import TranslationError, UnterminatedLiteralError
from .filesystem import safe_read
from .generator import generate
from .lexer import tokenize
from .parser import parse


def translate(source: str, config: TranslatorConfig | None = None) -> str:
    """Translate compact diagram notation into Mermaid markup.

    Runs the tokenizer, parser, and generator in sequence. Each call is
    independent and has no side effects.

    Args:
        source: Text in compact diagram notation.
        config: Rendering configuration; defaults to a new `TranslatorConfig`.

    Returns:
        str: Mermaid markup without a trailing newline.

    Raises:
        UnterminatedLiteralError: If a quoted literal is never closed.
        DiagramSyntaxError: If the input does not match the grammar.
        ConfigError: If the configuration fails validation.

    Examples:
        translate("flow\\nA -> B -> C")
        translate("seq\\nuser -> app: login")  # "sequenceDiagram\\n    user->>app: login"
    """
    return generate(parse(tokenize(source)), config)


class TranslateFileError(Exception):
    """Raised when translating a source file fails."""


def translate_file(filepath: Path, config: TranslatorConfig | None = None) -> str:
    """Read a UTF-8 source file and translate it.

    Args:
        filepath: Path to the compact notation file.
        config: Rendering configuration; defaults to a new `TranslatorConfig`.

    Returns:
        str: Mermaid markup.

    Raises:
        TranslateFileError: If configuration is invalid, the file cannot be read
            or decoded, is blank, or its content fails to translate. The
            message names the file.

    Examples:
        mermaid = translate_file(Path("login.mad"))
    """
    config = config or TranslatorConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise TranslateFileError(str(error)) from error

    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise TranslateFileError(error_message) from error
    except IOError as error:
        raise TranslateFileError(str(error)) from error

    if not content.strip():
        raise TranslateFileError(f"{filepath} is empty.")

    try:
        return translate(content, config)
    except UnterminatedLiteralError as error:
        error_message = (
            f"{filepath} contains an unterminated string at line {error.line}, "
            f"column {error.column}."
        )
        raise TranslateFileError(error_message) from error
    except TranslationError as error:
        raise TranslateFileError(f"{filepath}: {error}") from error
