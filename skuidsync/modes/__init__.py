"""Subcommand handlers."""
from .base_handler import ModeHandler
from .retrieve_handler import RetrieveHandler
from .list_handler import ListHandler
from .package_handler import PackageHandler

__all__ = ['ModeHandler', 'RetrieveHandler', 'ListHandler', 'PackageHandler']
