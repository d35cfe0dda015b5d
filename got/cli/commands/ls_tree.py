"""Inspect stored objects: ls-tree, cat-file and count-objects."""

import click
from got.core.errors import GotError
from got.core.objects import TREE
from got.core.repository import Repository
from got.operations import list_tree, count_objects
from got.cli.output import error, format_content
from colorama import Fore, Style


@click.command('ls-tree')
@click.option('-r', '--recursive', is_flag=True, help='Recurse into sub-trees')
@click.option('--name-only', is_flag=True, help='Show only file names')
@click.option('--abbrev', type=int, default=0, help='Abbreviate hash to N characters')
@click.argument('tree_hash')
def ls_tree_cmd(recursive, name_only, abbrev, tree_hash):
    """
    List contents of a tree object.

    Examples:
        got ls-tree 3f2a9c1                # Show top-level entries
        got ls-tree -r 3f2a9c1             # Recursively list everything
        got ls-tree --name-only 3f2a9c1    # Only show names
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a got repository"))
        raise click.Abort()

    try:
        for path, entry in list_tree(repo.work_tree, tree_hash, recursive):
            display = f"{path}/" if entry.type == TREE else path

            if name_only:
                click.echo(display)
                continue

            hash_display = entry.hash[:abbrev] if abbrev else entry.hash
            click.echo(f"{entry.mode} {entry.type} {Fore.YELLOW}{hash_display}{Style.RESET_ALL}    {display}")

    except (GotError, OSError) as e:
        click.echo(error(f"ls-tree failed: {e}"))
        raise click.Abort()


@click.command('cat-file')
@click.option('-t', '--type', 'show_type', is_flag=True, help='Show object type')
@click.option('-s', '--size', 'show_size', is_flag=True, help='Show object size')
@click.option('-p', '--pretty', is_flag=True, help='Pretty-print object content')
@click.argument('object_hash')
def cat_file_cmd(show_type, show_size, pretty, object_hash):
    """
    Show object content, type, or size.

    Examples:
        got cat-file -t abc123     # Show object type
        got cat-file -s abc123     # Show object size
        got cat-file -p abc123     # Pretty-print object content
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a got repository"))
        raise click.Abort()

    try:
        obj = repo.read_object(object_hash)
    except (GotError, OSError) as e:
        click.echo(error(f"cat-file failed: {e}"))
        raise click.Abort()

    if show_type:
        click.echo(obj.type)
        return

    if show_size:
        click.echo(len(obj.content))
        return

    if pretty and obj.type == TREE:
        for entry in obj.entries:
            click.echo(f"{entry.mode} {entry.type} {Fore.YELLOW}{entry.hash}{Style.RESET_ALL}    {entry.name}")
        return

    click.echo(format_content(obj.content))


@click.command('count-objects')
@click.option('-v', '--verbose', is_flag=True, help='Show detailed information')
def count_objects_cmd(verbose):
    """
    Count objects in the repository.

    Examples:
        got count-objects          # Show object counts
        got count-objects -v       # Show breakdown by type
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a got repository"))
        raise click.Abort()

    try:
        counts = count_objects(repo.work_tree, by_type=verbose)
    except (GotError, OSError) as e:
        click.echo(error(f"count-objects failed: {e}"))
        raise click.Abort()

    if verbose:
        click.echo(f"{Fore.CYAN}Object Statistics:{Style.RESET_ALL}")
        click.echo(f"  Trees:   {Fore.YELLOW}{counts.trees}{Style.RESET_ALL}")
        click.echo(f"  Blobs:   {Fore.YELLOW}{counts.blobs}{Style.RESET_ALL}")
        if counts.corrupt > 0:
            click.echo(f"  Corrupt: {counts.corrupt}")
        click.echo()

    size_kb = counts.size / 1024
    click.echo(f"{counts.total} objects, {size_kb:.2f} KB")
