"""
Command line entry point for the admin dashboard cleanup.

Exit status:
    0  cleanup finished and verification found nothing left over
    1  configuration or store failure
    2  cancelled by the operator
    3  cleanup finished but verification reported leftovers
"""

# Load environment variables from .env file FIRST before any other imports
from dotenv import load_dotenv
load_dotenv()

import argparse
import asyncio
import sys
from typing import Callable, List, Optional

from admin_cleanup.core.config import Config, load_config
from admin_cleanup.core.errors import CleanupError
from admin_cleanup.core.logger import logger
from admin_cleanup.db.mongodb import MongoConnection
from admin_cleanup.models.cleanup import CleanupPolicy
from admin_cleanup.services.cleanup_runner import run_cleanup
from admin_cleanup.services.report import ConsoleReport

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CANCELLED = 2
EXIT_LEFTOVERS = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="admin-cleanup",
        description="Delete all customer requests, vendor registrations and "
                    "vendor user accounts to reset the admin dashboard.",
    )
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in CleanupPolicy],
        default=None,
        help="Which user accounts to delete (default: CLEANUP_POLICY or "
             "cascade_by_vendor_reference)",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Do not ask for confirmation before deleting",
    )
    return parser


def confirm(input_func: Callable[[str], str] = input) -> bool:
    try:
        answer = input_func("Type 'yes' to confirm: ")
    except EOFError:
        return False
    return answer.strip().lower() == "yes"


async def main(
    argv: Optional[List[str]] = None,
    config: Optional[Config] = None,
    connection: Optional[MongoConnection] = None,
    report: Optional[ConsoleReport] = None,
    input_func: Callable[[str], str] = input,
) -> int:
    args = build_parser().parse_args(argv)
    report = report or ConsoleReport()

    try:
        config = config or load_config()
    except CleanupError as e:
        logger.error(
            "Cleanup configuration is invalid",
            error=e,
            metadata={"event": "config_error", **e.details}
        )
        report.failed(e)
        return EXIT_FAILURE

    policy = CleanupPolicy(args.policy) if args.policy else config.cleanup_policy
    report.starting(policy)

    if not (args.yes or config.cleanup_assume_yes) and not confirm(input_func):
        report.cancelled()
        return EXIT_CANCELLED

    connection = connection or MongoConnection.from_config(config)

    try:
        summary = await run_cleanup(connection, policy, config, report)
    except CleanupError:
        # Already logged and reported by the runner
        return EXIT_FAILURE

    return EXIT_OK if summary.verification.is_clean else EXIT_LEFTOVERS


def cli():
    """Console script entry point; always exits explicitly"""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
