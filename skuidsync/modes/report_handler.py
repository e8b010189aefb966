"""Handler for the 'report' subcommand."""
import json
from colorama import Fore, Style

from .base_handler import ModeHandler
from ..errors import ManifestParseError, NotFoundError
from ..models.deploy import DeployResult
from ..utils.logger import get_logger
from ..utils.persistence.file_utils import read_text

log = get_logger(__name__)


class ReportHandler(ModeHandler):
    """Summarizes the per-org results of a deploy.

    Exits non-zero when any org reported a failure.
    """

    def __init__(self, app, args):
        super().__init__(app, args)
        self.results = []

    def execute(self) -> int:
        code = super().execute()
        failed = [r for r in self.results if not r.success]
        if code == 0 and failed:
            log.error("Deploy failed for %d org(s)", len(failed))
            return 1
        return code

    def prepare_context(self):
        return {'results_file': self.args.results}

    def execute_workflow(self, context):
        path = context['results_file']
        text = read_text(path)
        if text is None:
            raise NotFoundError(f"Could not read {path}")
        try:
            data = json.loads(text)
        except ValueError as e:
            raise ManifestParseError(f"{path} is not valid JSON: {e}") from e

        # One result per org, or a single bare result
        items = data if isinstance(data, list) else [data]
        if not all(isinstance(item, dict) for item in items):
            raise ManifestParseError(f"{path} does not hold deploy results")

        self.results = [DeployResult.from_dict(item) for item in items]
        return self.results

    def display_completion(self, results):
        for result in results:
            mark = f"{Fore.GREEN}✓" if result.success else f"{Fore.RED}✗"
            print(f"  {mark}{Style.RESET_ALL} {result.org_name or '—'}")
            for error in result.errors:
                print(f"      {error}")
