"""View command - print a stored object."""

import click
from got.core.errors import GotError
from got.core.repository import Repository
from got.operations import view_object
from got.cli.output import error, format_content


@click.command('view')
@click.argument('object_hash')
def view_cmd(object_hash):
    """
    Print the header and content of a stored object.

    OBJECT_HASH may be abbreviated to at least 4 characters.

    Examples:
        got view b6fc4c620b67d95f953a5c1c1230aaab5db5a1b0
        got view b6fc4c6
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a got repository"))
        raise click.Abort()

    try:
        kind, content = view_object(repo.work_tree, object_hash)
    except (GotError, OSError) as e:
        click.echo(error(str(e)))
        raise click.Abort()

    click.echo(f"Header: {kind} {len(content)}")
    click.echo("Content:")
    click.echo(format_content(content))
