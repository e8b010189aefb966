"""Handler for the 'package' subcommand."""
import json
import os
import sys
from colorama import Fore, Style

from .base_handler import ModeHandler
from ..errors import StorageError
from ..models.category import Category
from ..models.deploy import DeployPayload
from ..models.retrieve import RetrieveMetadata, RetrieveRequest
from ..utils.logger import get_logger
from ..utils.persistence.entity_store import parse_module_list, read_modules
from ..utils.persistence.file_utils import write_text

log = get_logger(__name__)


class PackageHandler(ModeHandler):
    """Builds a deploy payload, or a retrieve request, from local records."""

    def prepare_context(self):
        directory = self.target_dir()
        category = None
        if getattr(self.args, 'request', False):
            category = self.args.category or os.path.basename(os.path.normpath(directory))
            if category not in {c.value for c in Category}:
                log.error("Cannot tell the category of %s; pass --category", directory)
                return None

        return {
            'directory': directory,
            'modules': parse_module_list(self.module_value()),
            'pattern': getattr(self.args, 'file', None) or '',
            'output': getattr(self.args, 'output', None),
            'category': category,
        }

    def execute_workflow(self, context):
        records = read_modules(context['directory'], context['modules'], context['pattern'])
        if context['category']:
            payload = RetrieveRequest(RetrieveMetadata.from_records(context['category'], records))
            if payload.metadata.is_empty():
                log.warning("No records with a unique id to request")
        else:
            payload = DeployPayload.from_records(records)
            if payload.is_empty():
                log.warning("No records to deploy")

        text = json.dumps(payload.to_dict(), indent=4)
        output = context['output']
        if not output or output == '-':
            sys.stdout.write(text + "\n")
            return payload

        try:
            write_text(output, text)
        except OSError as e:
            raise StorageError(f"Could not write {output}: {e}", path=output) from e
        log.info("Wrote %s to %s", "retrieve request" if context['category'] else "deploy payload", output)
        return payload

    def display_completion(self, payload):
        if self.args.output and self.args.output != '-':
            if isinstance(payload, RetrieveRequest):
                count = sum(len(payload.metadata.for_category(c)) for c in Category)
            else:
                count = len(payload.changes)
            print(f"{Fore.GREEN}[SUCCESS] Packaged {count} record(s){Style.RESET_ALL}")
