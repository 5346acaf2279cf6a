"""Command-line interface for the user graph builder."""

import argparse
import logging
import sys

from user_graph.analytics.types import DEFAULT_TOP_K
from user_graph.config import RunConfig, default_output_dir
from user_graph.errors import IoError, ParseError
from user_graph.solver.solve import main_solve

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="user-graph",
        description="Cluster co-spent addresses and build the cluster value-flow graph.",
    )

    parser.add_argument(
        "name",
        help="Dataset name; reads <output-dir>/transactions-<name>.txt",
    )

    parser.add_argument(
        "--input",
        default=None,
        help="Read transactions from this path instead of the derived one",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for inputs and outputs (default: $USER_GRAPH_OUTPUT_DIR or outputs)",
    )

    parser.add_argument(
        "--top-k",
        type=int,
        default=DEFAULT_TOP_K,
        help=f"Clusters listed per ranking in the stats report (default: {DEFAULT_TOP_K})",
    )

    parser.add_argument(
        "--multigraph",
        action="store_true",
        help="Also write multiUserGraph-<name>.txt with one edge per output",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    log_level = getattr(logging, args.log_level)
    configure_logging(log_level)

    if args.top_k < 1:
        parser.error(f"--top-k must be at least 1, got {args.top_k}")

    config = RunConfig(
        name=args.name,
        output_dir=args.output_dir or default_output_dir(),
        input_path=args.input,
        top_k=args.top_k,
        multigraph=args.multigraph,
    )

    try:
        main_solve(config)
    except (ParseError, IoError) as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
