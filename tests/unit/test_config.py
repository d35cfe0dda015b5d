"""Configuration tests."""

import zlib
import pytest
from got.core.config import Config, get_config


@pytest.fixture
def config(repo):
    """Config bound to an initialized repository."""
    return get_config(repo)


def test_get_repository_value(config):
    """Test values written at init are readable."""
    assert config.get('core', 'repositoryformatversion') == '0'


def test_get_fallback(config):
    """Test missing keys return the fallback."""
    assert config.get('core', 'missing') is None
    assert config.get('core', 'missing', 'default') == 'default'


def test_set_persists(repo, config):
    """Test set writes the repository config file."""
    config.set('core', 'compression', '9')
    assert Config(repo.config_file).get('core', 'compression') == '9'


def test_repository_overrides_global(repo, config):
    """Test repository config wins over global config."""
    config.set('core', 'compression', '1', global_config=True)
    config.set('core', 'compression', '2')
    assert Config(repo.config_file).get('core', 'compression') == '2'


def test_global_used_outside_repository(config):
    """Test global config applies when no repository is given."""
    config.set('core', 'compression', '3', global_config=True)
    assert get_config().get('core', 'compression') == '3'


def test_environment_overrides_files(config, monkeypatch):
    """Test GOT_<SECTION>_<KEY> has the highest precedence."""
    config.set('core', 'compression', '2')
    monkeypatch.setenv('GOT_CORE_COMPRESSION', '7')
    assert config.get('core', 'compression') == '7'


def test_set_without_repository_fails():
    """Test repository writes need a repository."""
    with pytest.raises(ValueError):
        Config().set('core', 'compression', '1')


def test_list_all_merges_scopes(config):
    """Test list_all shows repository values over global ones."""
    config.set('core', 'compression', '1', global_config=True)
    config.set('core', 'compression', '4')
    values = config.list_all()
    assert values['core']['compression'] == '4'
    assert values['core']['repositoryformatversion'] == '0'
    assert config.list_all(global_only=True)['core'] == {'compression': '1'}


def test_compression_level_default(config):
    """Test zlib's default is used when unset."""
    assert config.compression_level() == zlib.Z_DEFAULT_COMPRESSION


def test_compression_level_configured(config):
    """Test a valid level is returned as int."""
    config.set('core', 'compression', '9')
    assert config.compression_level() == 9


@pytest.mark.parametrize('value', ['fast', '10', '-2'])
def test_compression_level_invalid(config, value):
    """Test invalid levels fall back to the default."""
    config.set('core', 'compression', value)
    assert config.compression_level() == zlib.Z_DEFAULT_COMPRESSION
