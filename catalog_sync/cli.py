"""Command line entry point for the catalog sync job."""
import argparse
import sys
from typing import List, Optional

from catalog_sync.config import SyncSettings
from catalog_sync.exceptions import ConfigurationError
from catalog_sync.logging import get_logger, setup_logging
from catalog_sync.matching import MatchPolicy
from catalog_sync.reconciler import Reconciler

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="catalog-sync",
        description="Copy Weaviate object ids onto MongoDB products that are missing one",
    )
    parser.add_argument("--dry-run", action="store_true",
                        help="Look up matches and log them without writing to MongoDB")
    parser.add_argument("--policy", choices=[p.value for p in MatchPolicy], default=None,
                        help="How to choose between several Weaviate objects with the same name "
                             "(default: MATCH_POLICY or 'first')")
    parser.add_argument("--env-file", default=None,
                        help="Path to a .env file (default: .env in the working directory)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the sync and return the process exit code."""
    args = parse_args(argv)

    try:
        settings = SyncSettings.from_env(env_file=args.env_file)
    except ConfigurationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    policy = MatchPolicy.parse(args.policy) if args.policy else None

    try:
        reconciler = Reconciler.from_settings(settings, dry_run=args.dry_run, policy=policy)
        reconciler.run()
    except Exception as e:
        logger.error(f"Sync aborted: {e}")
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
