"""Integration tests for ls-tree, cat-file, count-objects and config."""

import logging
import pytest
from click.testing import CliRunner
from got.cli.main import cli


@pytest.fixture
def stored_tree(in_repo, working_files):
    """Add the sample files and return the root tree hash."""
    result = CliRunner().invoke(cli, ['add', '.'])
    assert result.exit_code == 0
    return result.output.strip().splitlines()[-1]


class TestLsTreeCommand:
    """Tests for got ls-tree."""

    def test_ls_tree(self, stored_tree):
        """Test top-level entries are listed."""
        result = CliRunner().invoke(cli, ['ls-tree', stored_tree])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 3
        assert lines[0].startswith('040000 tree ')
        assert lines[0].endswith('subdir/')

    def test_ls_tree_recursive_names(self, stored_tree):
        """Test recursive name-only listing."""
        result = CliRunner().invoke(cli, ['ls-tree', '-r', '--name-only', stored_tree])

        assert result.exit_code == 0
        assert result.output.splitlines() == ['subdir/', 'subdir/test3.txt', 'test1.txt', 'test2.txt']

    def test_ls_tree_of_blob_fails(self, in_repo, working_files):
        """Test blobs cannot be listed."""
        runner = CliRunner()
        blob_hash = runner.invoke(cli, ['add', 'test1.txt']).output.strip().splitlines()[-1]

        result = runner.invoke(cli, ['ls-tree', blob_hash])

        assert result.exit_code != 0
        assert 'not a tree' in result.output


class TestCatFileCommand:
    """Tests for got cat-file."""

    def test_cat_file_type(self, stored_tree):
        """Test -t prints the object type."""
        result = CliRunner().invoke(cli, ['cat-file', '-t', stored_tree])
        assert result.output.strip() == 'tree'

    def test_cat_file_size(self, in_repo, working_files):
        """Test -s prints the content length."""
        runner = CliRunner()
        blob_hash = runner.invoke(cli, ['add', 'test1.txt']).output.strip().splitlines()[-1]

        result = runner.invoke(cli, ['cat-file', '-s', blob_hash])
        assert result.output.strip() == '9'

    def test_cat_file_pretty_tree(self, stored_tree):
        """Test -p prints tree entries."""
        result = CliRunner().invoke(cli, ['cat-file', '-p', stored_tree])

        assert result.exit_code == 0
        assert 'test1.txt' in result.output
        assert 'blob' in result.output

    def test_cat_file_blob_content(self, in_repo, working_files):
        """Test blob content is printed."""
        runner = CliRunner()
        blob_hash = runner.invoke(cli, ['add', 'test2.txt']).output.strip().splitlines()[-1]

        result = runner.invoke(cli, ['cat-file', '-p', blob_hash])
        assert result.output.strip() == 'Content 2'

    def test_cat_file_unknown(self, in_repo):
        """Test unknown objects fail."""
        result = CliRunner().invoke(cli, ['cat-file', '-t', 'deadbeef'])
        assert result.exit_code != 0


class TestCountObjectsCommand:
    """Tests for got count-objects."""

    def test_count_objects(self, stored_tree):
        """Test the total is reported."""
        result = CliRunner().invoke(cli, ['count-objects'])

        assert result.exit_code == 0
        assert '5 objects' in result.output

    def test_count_objects_verbose(self, stored_tree):
        """Test -v breaks the count down by type."""
        result = CliRunner().invoke(cli, ['count-objects', '-v'])

        assert result.exit_code == 0
        assert 'Trees:   2' in result.output
        assert 'Blobs:   3' in result.output


class TestConfigCommand:
    """Tests for got config."""

    def test_config_set_and_get(self, in_repo):
        """Test a repository value round trips."""
        runner = CliRunner()
        result = runner.invoke(cli, ['config', 'set', 'core.compression', '9'])
        assert result.exit_code == 0

        result = runner.invoke(cli, ['config', 'get', 'core.compression'])
        assert result.output.strip() == '9'

    def test_config_get_missing(self, in_repo):
        """Test unknown keys fail."""
        result = CliRunner().invoke(cli, ['config', 'get', 'nonexistent.key'])

        assert result.exit_code != 0
        assert 'not found' in result.output

    def test_config_list(self, in_repo):
        """Test list prints section.key=value lines."""
        result = CliRunner().invoke(cli, ['config', 'list'])

        assert result.exit_code == 0
        assert 'core.repositoryformatversion=0' in result.output

    def test_config_set_global(self, temp_dir, monkeypatch, isolated_config):
        """Test --global works outside a repository."""
        monkeypatch.chdir(temp_dir)
        result = CliRunner().invoke(cli, ['config', 'set', '--global', 'core.compression', '1'])

        assert result.exit_code == 0
        assert 'compression = 1' in isolated_config.read_text()

    def test_verbose_flag_logs_writes(self, in_repo):
        """Test --verbose does not change the command result."""
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        (in_repo.work_tree / 'a.txt').write_bytes(b'hello')
        try:
            result = CliRunner().invoke(cli, ['--verbose', 'add', 'a.txt'])
        finally:
            root.handlers[:] = handlers
            root.setLevel(level)
        assert result.exit_code == 0
