#!/usr/bin/env python3
"""Programmatic workflow example.

This demonstrates using the components directly, without a host object:

* register plain functions on a `HandlerRegistry`
* build and validate a small refund workflow
* run it with a logging trace observer

The order amount and the customer's tier are passed as arguments.
"""

from __future__ import annotations

import argparse
from enum import Enum
from typing import Sequence

from decisive_flow import HandlerRegistry, LoggingTraceObserver, WorkflowBuilder
from decisive_flow.config import FlowSettings
from decisive_flow.logging import configure_logging


class Refund(str, Enum):
    AUTOMATIC = "automatic"
    MANUAL_REVIEW = "manual_review"
    DENIED = "denied"


def is_small(amount: float) -> bool:
    return amount <= 50


def is_trusted(tier: str) -> bool:
    return tier in {"gold", "platinum"}


def notify_finance(amount: float, tier: str) -> None:
    print(f"Finance notified: {amount:.2f} refund for a {tier} customer")


def automatic() -> Refund:
    return Refund.AUTOMATIC


def manual_review() -> Refund:
    return Refund.MANUAL_REVIEW


def denied() -> Refund:
    return Refund.DENIED


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Decide how a refund is handled.")
    parser.add_argument("--amount", type=float, required=True, help="Refund amount")
    parser.add_argument("--tier", default="standard", help='Customer tier, e.g. "gold"')
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = FlowSettings()
    configure_logging(settings.log_level, settings.log_format)

    registry = HandlerRegistry()
    registry.register_decision("small?", is_small, params=(0,))
    registry.register_decision("trusted?", is_trusted, params=(1,))
    registry.register_action("notify", notify_finance, params=(0, 1))
    registry.register_final("automatic", automatic)
    registry.register_final("manual", manual_review)
    registry.register_final("denied", denied)

    workflow = (
        WorkflowBuilder(registry, result_type=Refund)
        .add_decision_node("small?").true_outcome("automatic").false_outcome("trusted?").commit()
        .add_decision_node("trusted?").true_outcome("notify").false_outcome("denied").commit()
        .add_action_node("notify").outcome("manual").commit()
        .build(args.amount, args.tier)
    )

    result = workflow.run(LoggingTraceObserver())
    print(f"Refund: {result.value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
