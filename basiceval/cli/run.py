"""Run command for basiceval CLI."""

import json
import logging
import sys
from pathlib import Path

import click

from basiceval.errors import BasicError
from basiceval.io import BufferedIO, ConsoleIO
from basiceval.runtime.interpreter import Interpreter, RunConfig


@click.command()
@click.argument('program', type=click.Path(exists=True, dir_okay=False))
@click.option('--trace', '-t', is_flag=True, help='Log every statement as it is dispatched')
@click.option('--max-steps', type=click.IntRange(min=1), default=None,
              help='Fail once this many statements have run')
@click.option('--json-output', '-j', 'json_output', is_flag=True,
              help='Print a JSON summary (program output is captured)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def run_command(program, trace, max_steps, json_output, verbose):
    """Run a BASIC program."""
    level = logging.DEBUG if verbose else (logging.INFO if trace else logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    source = Path(program).read_text()
    io = BufferedIO() if json_output else ConsoleIO()
    config = RunConfig(trace=trace, max_steps=max_steps)

    try:
        interpreter = Interpreter.from_string(source, io=io, config=config)
    except BasicError as e:
        click.echo(f"Error loading {program}: {e}", err=True)
        sys.exit(1)

    result = interpreter.run()

    if json_output:
        output = result.to_dict()
        output["program"] = str(program)
        output["output"] = io.getvalue()
        click.echo(json.dumps(output, indent=2))
    elif not result.success:
        click.echo(f"Error running {program}: {result.error}", err=True)

    if not result.success:
        sys.exit(1)
