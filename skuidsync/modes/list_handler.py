"""Handler for the 'list' subcommand."""
from colorama import Fore, Style

from .base_handler import ModeHandler
from ..utils.persistence.entity_store import parse_module_list, read_modules


class ListHandler(ModeHandler):
    """Lists records stored locally in a category directory."""

    def prepare_context(self):
        return {
            'directory': self.target_dir(),
            'modules': parse_module_list(self.module_value()),
            'pattern': getattr(self.args, 'file', None) or '',
        }

    def execute_workflow(self, context):
        return read_modules(context['directory'], context['modules'], context['pattern'])

    def display_completion(self, records):
        if not records:
            print(f"{Fore.YELLOW}[INFO] No records found{Style.RESET_ALL}")
            return

        print(f"\n{Fore.CYAN}  {'NAME':<32} {'MODULE':<16} {'TYPE':<12} BODY{Style.RESET_ALL}")
        for record in records:
            print(
                f"  {record.name or '—':<32} {record.module or '—':<16} "
                f"{record.type or '—':<12} {len(record.body)} chars"
            )
        print(f"\n{Fore.GREEN}[SUCCESS] {len(records)} record(s){Style.RESET_ALL}\n")
