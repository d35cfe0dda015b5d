"""Main CLI entry point for got."""

import logging

import click
from colorama import init

from got import __version__
from got.cli.output import BANNER
from got.cli.commands import (init_cmd, add_cmd, view_cmd, config_cmd,
                              ls_tree_cmd, cat_file_cmd, count_objects_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class GotGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=GotGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log object store activity')
def cli(verbose):
    """Store files and directories as content-addressed objects."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(view_cmd)
cli.add_command(config_cmd)
cli.add_command(ls_tree_cmd)
cli.add_command(cat_file_cmd)
cli.add_command(count_objects_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
