"""
CLI for executing Gremlin queries from a text file.

This module provides a command-line interface for:
- Loading the Gremlin endpoint settings from the environment / .env file
- Reading a query file (one Gremlin query per line)
- Executing the queries sequentially over a single session
- Printing result rows, or Cosmos DB diagnostic attributes on failure

Exit codes:
- 0: every query succeeded (or dry run validated)
- 1: a query failed, the run stopped early, or startup failed
- 130: interrupted by the user
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from gremlinrunner.cli.reporting import ConsoleReporter
from gremlinrunner.data.config import ConfigError, load_run_config
from gremlinrunner.queries.gremlin_executor import (
    GremlinConnectionError,
    GremlinSession,
    RunState,
    run_queries,
)
from gremlinrunner.queries.query_parser import (
    QueryFileNotFoundError,
    QueryFileReadError,
    read_queries,
)

logger = logging.getLogger(__name__)


def configure_logging(level_str: str = "WARNING") -> None:
    """Configure logging for CLI."""
    level = getattr(logging, level_str.upper(), logging.WARNING)
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Execute Gremlin queries from a file against a Gremlin endpoint",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Required settings (environment or .env file):
  HOSTNAME, PORT, AUTHKEY, DATABASE, COLLECTION, CONTINUE_ON_ERROR

Examples:
  # Run every query in queries.txt
  gremlinrunner-execute-queries queries.txt

  # Use another settings file and show progress logs
  gremlinrunner-execute-queries queries.txt --env-file prod.env --log-level INFO
        """,
    )

    parser.add_argument(
        "queries_file",
        type=str,
        help="Path to a text file with one Gremlin query per line",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help="Path to the dotenv settings file (default: .env in the working directory)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (logs go to stderr)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate settings and read the query file without connecting",
    )

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    configure_logging(args.log_level)
    reporter = ConsoleReporter()

    try:
        # 1. Load configuration
        config = load_run_config(env_file=args.env_file)

        # 2. Read queries
        logger.info(f"Reading queries from {args.queries_file}")
        queries = read_queries(args.queries_file)

        # 3. Dry run mode: exit early
        if args.dry_run:
            logger.info("DRY RUN MODE: configuration and queries validated successfully")
            print("\n✓ Dry run completed successfully")
            print(f"  Endpoint: {config.endpoint_url}")
            print(f"  Queries: {len(queries)} read")
            return 0

        # 4. Execute queries over a single session
        with GremlinSession(config) as session:
            report = run_queries(
                session=session,
                queries=queries,
                continue_on_error=config.continue_on_error,
                reporter=reporter,
            )

        reporter.print_summary(report)

        if report.state is RunState.COMPLETED and report.failed == 0:
            logger.info("✓ All queries processed successfully")
            return 0
        return 1

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        print(str(e))
        return 1
    except QueryFileNotFoundError as e:
        logger.error(f"File not found: {e}")
        print(str(e))
        return 1
    except QueryFileReadError as e:
        logger.error(f"Query file error: {e}")
        print(str(e))
        return 1
    except GremlinConnectionError as e:
        logger.error(f"Gremlin connection error: {e}")
        print(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
