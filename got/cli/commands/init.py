"""Initialize a new got repository."""

import click
from pathlib import Path
from got.core.errors import RepositoryExists
from got.operations import init_store
from got.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a new got repository.

    Creates a .got directory holding an empty object database.

    Examples:
        got init                    # Initialize in current directory
        got init my-project         # Initialize in my-project directory
    """
    try:
        repo_path = Path(path).resolve()

        # Create directory if it doesn't exist
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))

        repo = init_store(repo_path)

        click.echo(success(f"Initialized empty got repository in {repo.got_dir}"))
        click.echo(info("You can now store files with:"))
        click.echo(info("  got add <path>"))

    except RepositoryExists as e:
        click.echo(error(str(e)))
        click.echo(info("Use an empty directory or different path"))
        raise click.Abort()
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()
    except OSError as e:
        click.echo(error(f"Failed to initialize repository: {e}"))
        raise click.Abort()
