"""
skuidsync - Main CLI interface

Extracts retrieved Skuid metadata archives to disk and reads the local
manifest/body pairs back for listing, deploy packaging and retrieve
requests. Deploy responses can be summarized with `report`.
"""
import os
import sys
import argparse
from contextlib import ExitStack
from colorama import init

from . import __version__
from .errors import ArchiveReadError, StorageError
from .models.category import CATEGORY_NAMES
from .services.extractor import extract
from .services.filesystem import LocalFileSystem
from .utils.config_loader import ConfigLoader, handle_config_update
from .utils.logger import get_logger

log = get_logger(__name__)

# Initialize colorama
init(autoreset=True)

# ── Help-text epilogs for subcommands ──────────────────────────────────────

RETRIEVE_EXAMPLES = """\
Examples:
  skuidsync retrieve retrieve.zip
  skuidsync retrieve part1.zip part2.zip --dir ./metadata
  skuidsync retrieve *.zip --workers 4

Only entries under apps/, datasources/, pages/, profiles/ and themes/
are written; anything else in the archive is ignored.
"""

LIST_EXAMPLES = """\
Examples:
  skuidsync list --dir pages --module app1
  skuidsync list --dir pages --module app1,app2
  skuidsync list --file "pages/app1_*.json"
"""

PACKAGE_EXAMPLES = """\
Examples:
  skuidsync package --dir pages --module app1 --output deploy.json
  skuidsync package --file "pages/*.json"
  skuidsync package --dir pages --module app1 --request -o retrieve.json
"""

REPORT_EXAMPLES = """\
Examples:
  skuidsync report deploy-result.json
"""


class SkuidSync:
    """Main CLI application class."""

    def __init__(self, config=None):
        """Initialize CLI application."""
        self.config = config if config is not None else {}

    @staticmethod
    def filesystem_for(target_dir):
        """Create *target_dir* if needed and return a filesystem rooted there.

        Raises:
            StorageError: If the directory cannot be created.
        """
        try:
            os.makedirs(target_dir, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Could not create {target_dir}: {e}", path=target_dir) from e
        return LocalFileSystem(target_dir)

    def run_extraction(self, archives, target_dir, workers=1):
        """Extract the archive files at *archives* into *target_dir*.

        Archives are opened up front and all closed afterwards, whether or
        not extraction succeeded.
        """
        filesystem = self.filesystem_for(target_dir)
        log.info("Extracting %d archive(s) into %s", len(archives), target_dir)
        with ExitStack() as stack:
            try:
                streams = [stack.enter_context(open(path, 'rb')) for path in archives]
            except OSError as e:
                raise ArchiveReadError(f"Could not open archive: {e}") from e
            return extract(streams, filesystem, max_workers=workers)


# ── Argument Parser ────────────────────────────────────────────────────────

def create_argument_parser():
    """Create and configure the subparser-based argument parser."""
    parser = argparse.ArgumentParser(
        prog='skuidsync',
        description='skuidsync — retrieve and store Skuid metadata locally',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', help='Update the config file with a JSON string')

    # Shared parent so logging flags work after the subcommand name too
    _log_parent = argparse.ArgumentParser(add_help=False)
    _log_parent.add_argument('-v', '--verbose', action='store_true',
                             help='Display all possible logging info')
    _log_parent.add_argument('-q', '--quiet', action='store_true',
                             help='Only display warnings and errors')
    _log_parent.add_argument('--log-file', help='Also write log records to this file')

    # Shared local-read options
    _read_parent = argparse.ArgumentParser(add_help=False)
    _read_parent.add_argument('-d', '--dir', help='Directory holding the records')
    _read_parent.add_argument('-m', '--module', help='Module name(s), separated by a comma')
    _read_parent.add_argument('-f', '--file', help='Glob of manifest files (overrides --dir/--module)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ── retrieve ───────────────────────────────────────────────────────
    retrieve_parser = subparsers.add_parser(
        'retrieve',
        parents=[_log_parent],
        help='Extract retrieved metadata archives to disk',
        description='Write the metadata entries of one or more zip archives.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=RETRIEVE_EXAMPLES,
    )
    retrieve_parser.add_argument('archives', nargs='+', help='Zip archive(s) returned by retrieve')
    retrieve_parser.add_argument('-d', '--dir', help='Output directory (default: config or cwd)')
    retrieve_parser.add_argument('--workers', type=int, default=None,
                                 help='Extract archives on this many threads')

    # ── list ───────────────────────────────────────────────────────────
    subparsers.add_parser(
        'list',
        parents=[_log_parent, _read_parent],
        help='List records stored locally',
        description='Read manifest/body pairs and print a summary.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=LIST_EXAMPLES,
    )

    # ── package ────────────────────────────────────────────────────────
    package_parser = subparsers.add_parser(
        'package',
        parents=[_log_parent, _read_parent],
        help='Build a deploy payload from local records',
        description='Read manifest/body pairs and emit the deploy JSON payload.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=PACKAGE_EXAMPLES,
    )
    package_parser.add_argument('-o', '--output', help='Output file (default: stdout)')
    package_parser.add_argument('--request', action='store_true',
                                help='Emit a retrieve request for the records instead of a deploy payload')
    package_parser.add_argument('--category', choices=sorted(CATEGORY_NAMES),
                                help='Category of the records (default: name of --dir)')

    # ── report ─────────────────────────────────────────────────────────
    report_parser = subparsers.add_parser(
        'report',
        parents=[_log_parent],
        help='Summarize the results of a deploy',
        description='Print the per-org outcome of a deploy response.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=REPORT_EXAMPLES,
    )
    report_parser.add_argument('results', help='JSON file holding the deploy response')

    return parser


# ── Main Entry Point ──────────────────────────────────────────────────────

def main(argv=None):
    """Main CLI entry point."""
    from .utils.logger import setup_logging

    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(
        verbose=getattr(args, 'verbose', False),
        quiet=getattr(args, 'quiet', False),
        log_file=getattr(args, 'log_file', None),
    )

    # Handle --config (no subcommand needed)
    if args.config:
        return handle_config_update(args.config)

    if args.command is None:
        parser.print_help()
        return 1

    cli = SkuidSync(ConfigLoader.load_config())

    from .modes.retrieve_handler import RetrieveHandler
    from .modes.list_handler import ListHandler
    from .modes.package_handler import PackageHandler
    from .modes.report_handler import ReportHandler

    handlers = {
        'retrieve': lambda: RetrieveHandler(cli, args),
        'list': lambda: ListHandler(cli, args),
        'package': lambda: PackageHandler(cli, args),
        'report': lambda: ReportHandler(cli, args),
    }

    handler_factory = handlers.get(args.command)
    if not handler_factory:
        parser.print_help()
        return 1

    return handler_factory().execute()


if __name__ == '__main__':
    sys.exit(main())
