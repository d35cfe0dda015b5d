"""Integration tests for repository initialization."""

import pytest
from click.testing import CliRunner
from got.cli.main import cli


def test_init_creates_got_directory(temp_dir, monkeypatch):
    """Test that init creates .got/objects."""
    monkeypatch.chdir(temp_dir)
    result = CliRunner().invoke(cli, ['init'])

    assert result.exit_code == 0
    assert 'Initialized empty got repository' in result.output
    assert (temp_dir / '.got' / 'objects').is_dir()
    assert (temp_dir / '.got' / 'config').exists()


def test_init_creates_missing_directory(temp_dir):
    """Test init PATH creates the directory first."""
    target = temp_dir / 'new' / 'project'
    result = CliRunner().invoke(cli, ['init', str(target)])

    assert result.exit_code == 0
    assert (target / '.got' / 'objects').is_dir()


def test_double_init_fails(temp_dir):
    """Test that initializing twice fails."""
    runner = CliRunner()
    runner.invoke(cli, ['init', str(temp_dir)])
    result = runner.invoke(cli, ['init', str(temp_dir)])

    assert result.exit_code != 0
    assert 'already exists' in result.output


@pytest.mark.parametrize('command', [['add', '.'], ['view', 'a' * 40], ['count-objects']])
def test_commands_outside_repository(temp_dir, monkeypatch, command):
    """Test commands report a missing repository."""
    monkeypatch.chdir(temp_dir)
    result = CliRunner().invoke(cli, command)

    assert result.exit_code != 0
    assert 'Not a got repository' in result.output


def test_help_shows_commands():
    """Test the help lists the registered commands."""
    result = CliRunner().invoke(cli, ['--help'])
    assert result.exit_code == 0
    for name in ('init', 'add', 'view', 'ls-tree', 'cat-file', 'count-objects', 'config'):
        assert name in result.output
