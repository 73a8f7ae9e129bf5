"""
Translates compact diagram notation into Mermaid markup.
Reads a file or standard input and writes to a file or standard output.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import FLOWCHART_DIRECTIONS, ConfigError, build_config
from .exceptions import TranslationError
from .filesystem import collect_file_stat, enforce_file_size, get_max_file_size, write_output
from .translator import TranslateFileError, translate, translate_file

__all__ = ["cli"]

SYNTAX_EXAMPLES = """\
=== CHAINED CONNECTIONS ===
flow
@ start: Begin
start -> validate -> ? decision -> ! success
decision -> error: failed
error -> start: retry

=== SMART NODE INFERENCE ===
flow
login -> validate -> decision -> success
decision -> failure: rejected
failure -> login: retry

=== SYMBOL FLOWCHART ===
flow
@ login: User Login
login -> auth: authenticate
? auth: Valid?
auth -> home: yes
auth -> error: no
! home: Dashboard
error -> login: try again

=== COMPACT SEQUENCE ===
seq
user -> app: login
app -> db: check user
db -> app: user found
app -> user: welcome

=== SIMPLE CLASS ===
class
User
Order
Product

SYMBOLS:
@ or ○  = start node (rounded)
! or ●  = end node (rounded)
? or <> = decision node (diamond)
□       = process node (rectangle)

SHORTCUTS:
flow    = flowchart
seq     = sequence
->      = connection (-- or <-> for an undirected link)
: label = add label (quotes optional)
//      = comment

INFERENCE (nodes that are only ever connection targets):
- "check", "valid", "decide", "choose", "if", "?"  -> decision
- "start", "begin", "init", "launch", "open"       -> start
- "end", "finish", "complete", "done", "success", "fail" -> end
- anything else                                   -> process
"""


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="mermaid-aid")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (default: stdout)",
)
@click.option("-e", "--examples", is_flag=True, help="Show syntax examples and exit")
@click.option(
    "-d",
    "--direction",
    type=click.Choice(FLOWCHART_DIRECTIONS, case_sensitive=False),
    help="Flowchart direction",
)
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def cli(
    input_file: Path | None = None,
    output: Path | None = None,
    examples: bool = False,
    direction: str | None = None,
):
    """
    Translate compact diagram notation into Mermaid.

    Args:
        input_file: Source file; standard input is read when omitted.
        output: Destination file; standard output is used when omitted.
        examples: Print syntax examples instead of translating.
        direction: Override for the flowchart direction.

    Returns:
        None.

    Raises:
        click.BadParameter: If the configuration is invalid.
        click.ClickException: If the input is missing, too large, unreadable,
            or fails to translate, or if the output cannot be written.

    Examples:
        mermaid-aid login.mad -o login.mmd
        echo "seq\\nuser -> app: login" | mermaid-aid
    """
    if examples:
        click.echo(SYNTAX_EXAMPLES, nl=False)
        return

    search_path = input_file.parent if input_file is not None else Path.cwd()
    try:
        config = build_config(search_path, direction=direction)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    if input_file is not None:
        try:
            max_file_size = get_max_file_size(default=config.max_file_size)
        except ValueError as error:
            raise click.ClickException(str(error)) from error

        try:
            enforce_file_size(collect_file_stat(input_file), max_file_size, input_file)
        except IOError as error:
            raise click.ClickException(str(error)) from error

        try:
            mermaid = translate_file(input_file, config)
        except TranslateFileError as error:
            raise click.ClickException(str(error)) from error
    else:
        source = click.get_text_stream("stdin").read()
        if not source.strip():
            raise click.ClickException("No input provided")

        try:
            mermaid = translate(source, config)
        except TranslationError as error:
            raise click.ClickException(str(error)) from error

    if output is None:
        click.echo(mermaid)
        return

    try:
        write_output(output, mermaid)
    except IOError as error:
        raise click.ClickException(str(error)) from error
    click.echo(f"Output written to {output}", err=True)


if __name__ == "__main__":
    cli()
