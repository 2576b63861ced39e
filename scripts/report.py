"""CLI script to print a summary of the LPG Connect data store.

Usage:
    python scripts/report.py [--database-url sqlite:///./lpg_connect.db] [--volatile] [--export applications.csv]

Connects to the configured store (falling back to in-memory storage the same
way the service does), prints user and application figures, and optionally
exports every application to a CSV file.
"""

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is in the Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lpg_connect.config import Settings
from lpg_connect.errors import LPGConnectError
from lpg_connect.services.reporting import export_applications_csv, summarize
from lpg_connect.stores.factory import create_store

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def format_summary(stats) -> str:
    """Render an ApplicationStatistics as plain text lines."""
    lines = [
        f"Total users: {stats.total_users}",
        f"Total applications: {stats.total_applications}",
    ]
    for status, count in stats.status_counts.items():
        lines.append(f"  {status.value}: {count}")
    lines.append(f"Approval rate: {stats.approval_rate:.1f}%")
    for username, count in sorted(stats.applications_by_user.items()):
        lines.append(f"  Applications by {username}: {count}")
    latest = stats.latest_application_at
    lines.append(f"Latest application: {latest.isoformat() if latest else 'n/a'}")
    return "\n".join(lines)


def main(args=None):
    """Main entry point for the report CLI script.

    Args:
        args: Command-line arguments (defaults to sys.argv if None).

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    parser = argparse.ArgumentParser(
        description="Summarize LPG Connect users and applications"
    )
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="Database URL (default: uses DATABASE_URL env var or sqlite:///./lpg_connect.db)",
    )
    parser.add_argument(
        "--volatile",
        action="store_true",
        help="Use a fresh in-memory store instead of the database",
    )
    parser.add_argument(
        "--export",
        type=str,
        default=None,
        help="Write all applications to this CSV file",
    )

    parsed_args = parser.parse_args(args)

    overrides = {}
    if parsed_args.database_url:
        overrides["DATABASE_URL"] = parsed_args.database_url
    if parsed_args.volatile:
        overrides["STORAGE_BACKEND"] = "volatile"
    config = Settings(**overrides)

    try:
        store = create_store(config)
        print(format_summary(summarize(store)))

        if parsed_args.export:
            count = export_applications_csv(store, parsed_args.export)
            logger.info("Wrote %d applications to %s", count, parsed_args.export)
        return 0

    except LPGConnectError as e:
        logger.error("Report failed: %s", e)
        return 1
    except OSError as e:
        logger.error("Could not write export file: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
