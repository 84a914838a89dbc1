import argparse
import logging
import sys
import textwrap
from pathlib import Path

from . import Processor, Scanner, ScanSettings, ScanError, ConfigError
from .report.render import render_text
from .report.serialize import ReportFormat, to_json, to_msgpack
from .utils.processor import supported_hash_algorithms

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='treedup',
        description='Scan a directory tree and report files that are probable duplicates, by identical content and by '
                    'identical file name without extension.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              treedup ~/Downloads
              treedup ~/Pictures --include '*.jpg' --include '*.png'
              treedup /backup --exclude node_modules --exclude '*.tmp'
              treedup /backup --format json --output report.json

            Settings are read from PATH/.treedup.toml (or $TREEDUP_CONFIG, or --config).
            Patterns given on the command line are added to those from settings.
            ''').strip()
    )
    parser.add_argument(
        'directory',
        nargs='?',
        metavar='PATH',
        help='Directory to scan')
    parser.add_argument(
        '-d', '--dir',
        metavar='PATH',
        help='Directory to scan (alternative to the positional PATH)')
    parser.add_argument(
        '-e', '--exclude',
        action='append',
        default=[],
        metavar='GLOB',
        help='Skip entries whose name matches GLOB, including whole directories. May be repeated.')
    parser.add_argument(
        '-i', '--include',
        action='append',
        default=[],
        metavar='GLOB',
        help='Only index files whose name matches GLOB. Directories are always searched. May be repeated.')
    parser.add_argument(
        '--include-hidden',
        action='store_true',
        default=None,
        help='Also scan entries whose name starts with a dot (default: skipped)')
    parser.add_argument(
        '--hash',
        metavar='ALGORITHM',
        choices=supported_hash_algorithms(),
        help='Hash algorithm used to fingerprint content (default: sha256)')
    parser.add_argument(
        '--concurrency',
        type=int,
        metavar='N',
        help='Number of worker processes computing hashes (default: number of CPUs)')
    parser.add_argument(
        '--format',
        choices=[f.value for f in ReportFormat],
        default=ReportFormat.TEXT.value,
        help='Output format: text (default), json, or msgpack (paths as raw bytes)')
    parser.add_argument(
        '-o', '--output',
        metavar='PATH',
        help='Write the report to PATH instead of standard output')
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='Path to a TOML settings file')
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Do not print the scan banner and summary to standard error')
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log progress to standard error')
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Path to log file. If not provided, uses logging.path from settings or no logging.')
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to INFO when logging is enabled.')
    return parser


def configure_logging(args: argparse.Namespace, settings: ScanSettings) -> None:
    """Configure the root logger from command-line arguments, falling back to settings.

    A log file (--log-file, else logging.path) takes precedence over --verbose,
    which logs to standard error. Without either, only warnings reach standard error.
    """
    log_file = args.log_file or settings.log_path
    log_level = args.log_level or settings.log_level or 'INFO'

    if log_file:
        logging.basicConfig(filename=log_file, level=getattr(logging, log_level), format=LOG_FORMAT, force=True)
    elif args.verbose:
        logging.basicConfig(stream=sys.stderr, level=getattr(logging, log_level), format=LOG_FORMAT, force=True)


def _write_report(args: argparse.Namespace, report) -> None:
    report_format = ReportFormat(args.format)

    if report_format == ReportFormat.TEXT:
        lines = list(render_text(report))
        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.writelines(line + '\n' for line in lines)
        else:
            for line in lines:
                print(line)
    elif report_format == ReportFormat.JSON:
        data = to_json(report)
        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(data + '\n')
        else:
            print(data)
    else:
        data = to_msgpack(report)
        if args.output:
            with open(args.output, 'wb') as f:
                f.write(data)
        else:
            sys.stdout.flush()
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    directory = args.dir if args.dir is not None else args.directory
    if directory is None:
        parser.error('a directory to scan is required')
    if args.dir is not None and args.directory is not None:
        parser.error('give the directory either as PATH or with --dir, not both')
    if args.concurrency is not None and args.concurrency < 1:
        parser.error('--concurrency must be at least 1')

    root = Path(directory)

    try:
        if args.config:
            settings = ScanSettings.load(args.config)
        else:
            settings = ScanSettings.discover(root)

        configure_logging(args, settings)

        concurrency = args.concurrency or settings.concurrency
        hash_algorithm = args.hash or settings.hash_algorithm
        if hash_algorithm not in supported_hash_algorithms():
            raise ConfigError(f"unknown hash algorithm: {hash_algorithm}")

        if not args.quiet:
            print(f"Searching {root}", file=sys.stderr)

        with Processor(concurrency, hash_algorithm) as processor:
            scanner = Scanner(
                processor,
                exclude_patterns=settings.exclude_patterns + args.exclude,
                include_patterns=settings.include_patterns + args.include,
                include_hidden=settings.include_hidden if args.include_hidden is None else args.include_hidden,
            )
            result = scanner.scan(root)

        _write_report(args, result.report)

        if not args.quiet:
            failures = len(result.index.digest_failures)
            if failures:
                print(f"{failures} file(s) could not be read and were left out of the content comparison",
                      file=sys.stderr)

    except KeyboardInterrupt:
        if not args.quiet:
            print("\nScan cancelled by user", file=sys.stderr)
        return EXIT_INTERRUPTED

    except ScanError as e:
        logger.debug(f"Scan of {root} failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    except OSError as e:
        # Report output could not be written
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK


def treedup_main():
    sys.exit(main())


if __name__ == '__main__':
    treedup_main()
