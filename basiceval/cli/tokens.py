"""Tokens command for basiceval CLI."""

import sys
from pathlib import Path

import click

from basiceval.errors import LexError
from basiceval.tokenizer import TokenKind, Tokenizer


@click.command()
@click.argument('program', type=click.Path(exists=True, dir_okay=False))
def tokens_command(program):
    """Dump the token stream of a BASIC program."""
    try:
        for token in Tokenizer(Path(program).read_text()):
            if token.kind is TokenKind.NEWLINE:
                click.echo(f"{token.line:>4}  NEWLINE")
            else:
                click.echo(f"{token.line:>4}  {token.kind.name:<10} {token.value!r}")
    except LexError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
