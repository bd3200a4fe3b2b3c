"""basiceval CLI Package"""

import click

from basiceval.cli.run import run_command
from basiceval.cli.tokens import tokens_command


@click.group()
@click.version_option(package_name="basiceval")
def main():
    """basiceval - run line-numbered BASIC programs."""
    pass


main.add_command(run_command, "run")
main.add_command(tokens_command, "tokens")

__all__ = [
    "main",
    "run_command",
    "tokens_command",
]
