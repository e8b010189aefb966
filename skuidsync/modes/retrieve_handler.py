"""Handler for the 'retrieve' subcommand."""
import os
from colorama import Fore, Style

from .base_handler import ModeHandler
from ..utils.logger import get_logger

log = get_logger(__name__)


class RetrieveHandler(ModeHandler):
    """Extracts retrieved metadata archives into the target directory."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Retrieve{Style.RESET_ALL}\n")

    def validate_prerequisites(self):
        missing = [path for path in self.args.archives if not os.path.isfile(path)]
        for path in missing:
            log.error("Archive not found: %s", path)
        return not missing

    def prepare_context(self):
        workers = self.args.workers or self.config.get('retrieve_workers') or 1
        if isinstance(workers, bool) or not isinstance(workers, int):
            log.error("retrieve_workers must be an integer, got %r", workers)
            return None
        return {
            'target_dir': self.target_dir(),
            'archives': list(self.args.archives),
            'workers': max(1, workers),
        }

    def execute_workflow(self, context):
        return self.app.run_extraction(
            context['archives'], context['target_dir'], context['workers'],
        )

    def display_completion(self, result):
        if result.is_empty():
            print(f"{Fore.YELLOW}[INFO] No metadata found in the retrieved archive(s){Style.RESET_ALL}\n")
            return

        for path in result.files:
            print(f"  {Fore.WHITE}{path}{Style.RESET_ALL}")
        print(
            f"\n{Fore.GREEN}[SUCCESS] Wrote {len(result.files)} file(s) "
            f"in {len(result.directories)} director(ies){Style.RESET_ALL}\n"
        )
