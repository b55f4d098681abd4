"""CLI entrypoint.

Runs (or describes) the reference workflow in `decisive_flow.example`, which is
the quickest way to see validation and trace output end to end.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from decisive_flow import __version__
from decisive_flow.config import FlowSettings
from decisive_flow.engine.trace import LoggingTraceObserver
from decisive_flow.errors import WorkflowError
from decisive_flow.example import ExampleWorkflow
from decisive_flow.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="decisive-flow",
        description="Validate and run binary-decision workflows",
    )
    parser.add_argument("--version", action="version", version=f"decisive-flow {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_example = subparsers.add_parser("run-example", help="Run the reference workflow")
    run_example.add_argument("--a", default="a", help="Parameter 0, read by decision node A")
    run_example.add_argument(
        "--b", type=int, default=5, help="Parameter 1, read by decision nodes B and G"
    )
    run_example.add_argument(
        "--trace",
        action="store_true",
        help="Log every visited node (also enabled by DECISIVE_FLOW_TRACE)",
    )

    describe = subparsers.add_parser(
        "describe-example", help="Print the validated reference workflow as JSON"
    )
    describe.add_argument("--a", default="a", help="Parameter 0")
    describe.add_argument("--b", type=int, default=5, help="Parameter 1")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = FlowSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, settings.log_format)

    try:
        workflow = ExampleWorkflow().build(args.a, args.b)

        if args.command == "describe-example":
            print(json.dumps(workflow.to_json(), indent=2, ensure_ascii=False))
            return 0

        if args.command == "run-example":
            observer = LoggingTraceObserver() if (args.trace or settings.trace) else None
            result = workflow.run(observer)
            print(result.value)
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except WorkflowError as e:
        logger.error(str(e), extra={"node_id": e.node_id})
        print(str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
