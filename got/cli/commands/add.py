"""Add command - store files and directories as objects."""

import click
from got.core.errors import GotError
from got.core.repository import Repository
from got.operations import add_path, hash_path
from got.cli.output import success, error, info


@click.command('add')
@click.argument('path', type=click.Path())
@click.option('-n', '--dry-run', is_flag=True, help='Compute the hash without writing objects')
def add_cmd(path, dry_run):
    """
    Store a file or directory in the object database.

    A directory is stored recursively as a tree of blobs and subtrees.
    The hash of the top-level object is printed.

    Examples:
        got add file.txt
        got add src
        got add .
        got add -n src              # Only print the hash
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a got repository"))
        raise click.Abort()

    try:
        if dry_run:
            object_hash = hash_path(repo.work_tree, path)
            click.echo(info(f"{path} would be stored as {object_hash}"))
        else:
            object_hash = add_path(repo.work_tree, path)
            click.echo(success(f"Added {path}"))
        click.echo(object_hash)

    except (GotError, OSError) as e:
        click.echo(error(f"Failed to add {path}: {e}"))
        raise click.Abort()
