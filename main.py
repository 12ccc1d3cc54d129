#!/usr/bin/env python3
"""
    Main entry point for the host inventory tool.

Usage:
  python main.py
  python main.py --output-dir \\\\fileserver\\inventory
  python main.py --include-installed-products

Environment variables (overridden by the flags above):
  HOSTINV_OUTPUT_DIR, HOSTINV_INCLUDE_INSTALLED_PRODUCTS,
  HOSTINV_USERS_ROOT, HOSTINV_LOG_LEVEL
"""
import argparse
import logging
import sys
from pathlib import Path

from collectors.windows import connect
from core.config import get_settings
from core.inventory import build_inventory
from core.report import write_json_report
from reports.formatter import print_summary
from shared.system import get_run_context

logger = logging.getLogger("hostinventory")


def build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="host-inventory",
        description="Snapshot this machine's hardware, OS, network and peripherals to <hostname>.json.",
    )
    parser.add_argument(
        "--output-dir",
        metavar="PATH",
        type=Path,
        default=settings.output_dir,
        help="Directory for the report (created if missing). Default: %(default)s",
    )
    parser.add_argument(
        "--include-installed-products",
        action="store_true",
        default=settings.include_installed_products,
        help="Also enumerate MSI products via Win32_Product. Slow and may trigger installer repairs.",
    )
    parser.add_argument(
        "--users-root",
        metavar="PATH",
        type=Path,
        default=settings.users_root,
        help="Folder holding user profile directories. Default: %%SystemDrive%%\\Users",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Default: %(default)s",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(message)s")

    context = get_run_context()
    logger.info("Starting inventory of %s as %s", context.computer, context.operator)

    try:
        report = build_inventory(
            connect,
            context,
            include_installed_products=args.include_installed_products,
            users_root=args.users_root,
        )
    except Exception as e:
        logger.error("Inventory aborted, no report written: %s", e)
        return 1

    try:
        out_path = write_json_report(report, args.output_dir)
    except OSError as e:
        logger.error("Could not write report to %s: %s", args.output_dir, e)
        return 2

    print_summary(report, out_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
