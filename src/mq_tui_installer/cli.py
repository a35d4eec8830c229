"""Console entry point for the mq-tui installer.

Thin wrapper: parses flags, configures logging, runs the pipeline and maps
InstallerError onto a non-zero exit code.
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import InstallerConfig
from .exceptions import InstallerError
from .pipeline import InstallPipeline

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mq-tui-installer",
        description="Install the latest mq-tui release binary into ~/.mq/bin.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"mq-tui installer v{__version__}")
    parser.add_argument(
        "--install-dir",
        type=Path,
        default=None,
        help="Install root (default: $MQ_INSTALL_DIR or ~/.mq); the binary goes into <install-dir>/bin",
    )
    parser.add_argument(
        "--no-modify-path",
        action="store_true",
        help="Do not edit the shell profile",
    )
    parser.add_argument("--timeout", type=float, default=None, help="Network timeout in seconds")
    parser.add_argument("--retries", type=int, default=None, help="Retries on transient network errors")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        config = InstallerConfig.from_env(
            install_dir=args.install_dir.expanduser() if args.install_dir else None,
            timeout=args.timeout,
            retries=args.retries,
        )
        report = InstallPipeline(config, modify_path=not args.no_modify_path).run()
    except InstallerError as e:
        logger.error(e.message)
        return EXIT_FAILURE
    except ValueError as e:
        # Invalid option values rejected by InstallerConfig validation
        logger.error(f"Invalid configuration: {e}")
        return EXIT_FAILURE

    print(f"{config.binary_name} {report.version} installed to {report.installed_path}")
    print("Restart your terminal (or source your shell profile), then run:")
    print(f"  {report.artifact.binary_name} --version")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
