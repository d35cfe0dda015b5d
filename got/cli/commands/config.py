"""Config command - manage repository configuration."""

import click
from got.core.config import get_config
from got.core.repository import Repository
from got.cli.output import success, error, info


def _split_key(key):
    """Split 'section.option'; bare keys go to the core section."""
    return key.split('.', 1) if '.' in key else ('core', key)


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        got config set core.compression 9
        got config set --global core.compression 1
    """
    repo = None
    if not is_global:
        repo = Repository.find_repository()
        if not repo:
            click.echo(error("Not a got repository (use --global for global config)"))
            raise click.Abort()

    section, option = _split_key(key)
    try:
        get_config(repo).set(section, option, value, global_config=is_global)
    except OSError as e:
        click.echo(error(f"Failed to write config: {e}"))
        raise click.Abort()

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('get')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Get global config only')
def config_get(key, is_global):
    """
    Get a config value.

    Examples:
        got config get core.compression
    """
    repo = None if is_global else Repository.find_repository()
    section, option = _split_key(key)

    value = get_config(repo).get(section, option)
    if value is None:
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(value)


@config_cmd.command('list')
@click.option('--global', 'is_global', is_flag=True, help='List global config only')
def config_list(is_global):
    """
    List all config values.

    Examples:
        got config list
        got config list --global
    """
    repo = None if is_global else Repository.find_repository()
    config = get_config(repo)

    values = config.list_all(global_only=is_global)
    if not values:
        click.echo(info("No configuration set"))
        return

    for section in sorted(values):
        for key, value in sorted(values[section].items()):
            click.echo(f"{section}.{key}={value}")
