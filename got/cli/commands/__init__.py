"""CLI commands for got."""

from got.cli.commands.init import init_cmd
from got.cli.commands.add import add_cmd
from got.cli.commands.view import view_cmd
from got.cli.commands.config import config_cmd
from got.cli.commands.ls_tree import ls_tree_cmd, cat_file_cmd, count_objects_cmd

__all__ = ['init_cmd', 'add_cmd', 'view_cmd', 'config_cmd',
           'ls_tree_cmd', 'cat_file_cmd', 'count_objects_cmd']
