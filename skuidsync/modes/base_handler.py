"""Base mode handler with template method pattern."""
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
from colorama import Fore, Style

from ..errors import SkuidSyncError
from ..utils.logger import get_logger

log = get_logger(__name__)


class ModeHandler(ABC):
    """Abstract base class for all subcommand handlers."""

    def __init__(self, app, args):
        """Initialize mode handler.

        Args:
            app: Main SkuidSync CLI instance holding the loaded config
            args: Parsed command-line arguments
        """
        self.app = app
        self.config = app.config
        self.args = args

    def execute(self) -> int:
        """Execute mode workflow (Template Method).

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        self.display_banner()

        if not self.validate_prerequisites():
            return 1

        context = self.prepare_context()
        if context is None:
            return 1

        try:
            result = self.execute_workflow(context)
        except SkuidSyncError as e:
            log.error("%s", e)
            return 1

        if result is None or result is False:
            return 1

        self.display_completion(result)
        return 0

    def display_banner(self):
        """Display mode-specific banner. Silent by default."""
        pass

    def validate_prerequisites(self) -> bool:
        return True

    @abstractmethod
    def prepare_context(self) -> Optional[Dict[str, Any]]:
        """Prepare execution context.

        Returns:
            Context dictionary with required data, or None if preparation failed
        """

    @abstractmethod
    def execute_workflow(self, context: Dict[str, Any]) -> Any:
        """Execute mode-specific workflow.

        Args:
            context: Prepared context dictionary

        Returns:
            Result object (mode-specific), or None/False if failed
        """

    def display_completion(self, result: Any):
        print(f"\n{Fore.GREEN}[SUCCESS] Done{Style.RESET_ALL}\n")

    def target_dir(self) -> str:
        """Resolve the working directory from ``--dir``, config, or cwd."""
        return getattr(self.args, 'dir', None) or self.config.get('dir') or '.'

    def module_value(self) -> str:
        """Resolve the module filter from ``--module`` or config."""
        return getattr(self.args, 'module', None) or self.config.get('module') or ''
