"""Command-line interface for measuring a directory tree."""

from __future__ import annotations

import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path

import structlog

from dirstat.core import TerminationPolicy, WorkerPool
from dirstat.reporting import DefaultReportExporter, ExportFormat
from dirstat.shared import ConfigurationError, TraversalConfig, configure_logging, write_error_report


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="dirstat",
        description="Computes the total size and file count of a directory tree using parallel workers.",
    )
    parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=None,
        help="Directory to measure (default: current directory)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Number of worker threads (default: $DIRSTAT_WORKERS, $WORKERS or the CPU count)",
    )
    parser.add_argument(
        "--idle-timeout",
        type=float,
        metavar="MS",
        help="How long an idle worker waits for work, in milliseconds (default: 50)",
    )
    parser.add_argument(
        "--termination",
        choices=[policy.value for policy in TerminationPolicy],
        default=None,
        help="When idle workers stop (default: quiescence)",
    )
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in ExportFormat],
        default=ExportFormat.TEXT.value,
        help="Report format (default: text)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show detailed logs",
    )
    return parser


def _resolve_config(args: Namespace) -> TraversalConfig:
    idle_timeout = args.idle_timeout / 1000 if args.idle_timeout is not None else None
    base = TraversalConfig.from_env() if args.workers is None else TraversalConfig.default()
    return base.with_overrides(
        workers=args.workers,
        idle_timeout=idle_timeout,
        termination=args.termination,
    )


def _run(args: Namespace) -> int:
    logger = structlog.get_logger(__name__)
    target: Path = args.path if args.path is not None else Path.cwd()

    if not target.exists():
        logger.error("invalid-path", path=str(target))
        return 1
    if target.is_file():
        logger.error("not-a-directory", path=str(target))
        return 1
    if not target.is_dir():
        logger.error("unknown-path-type", path=str(target))
        return 1

    try:
        config = _resolve_config(args)
    except ConfigurationError as exc:
        logger.error("invalid-configuration", error=str(exc))
        return 2

    pool = WorkerPool(
        config.workers,
        idle_timeout=config.idle_timeout,
        policy=config.termination,
    )
    logger.info(
        "starting-traversal",
        path=str(target),
        workers=config.workers,
        termination=config.termination.value,
    )

    try:
        result = pool.traverse(target)
    except Exception as exc:
        logger.exception("traversal-failed", path=str(target), error=str(exc))
        report = write_error_report(exc, where="cli", context={"path": str(target), "workers": config.workers})
        logger.error("error-report-written", report=str(report.path))
        return 1

    logger.info(
        "traversal-complete",
        items=result.total.item_count,
        bytes=result.total.total_bytes,
        skipped=result.skipped,
    )
    print(DefaultReportExporter().render(result, ExportFormat(args.format)))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=10 if args.verbose else 20)
    return _run(args)


if __name__ == "__main__":
    sys.exit(main())
