"""A small reference workflow.

    A? --true--> B? --true--> C (action) --> D => RESULT_X
     |            `--false--> E => RESULT_Y
     `--false--> G? --true--> E => RESULT_Y
                  `--false--> F => RESULT_Z

B and G are synonyms for the same decision handler. Every handler lives on a
single host object, and the two build-time parameters are `a` (index 0) and
`b` (index 1).
"""

from __future__ import annotations

import logging
from enum import Enum

from decisive_flow.builder import WorkflowBuilder
from decisive_flow.handlers.registry import action_node, decision_node, final_node
from decisive_flow.workflow import Workflow

logger = logging.getLogger(__name__)


class Result(str, Enum):
    RESULT_X = "RESULT_X"
    RESULT_Y = "RESULT_Y"
    RESULT_Z = "RESULT_Z"


class ExampleWorkflow:
    def __init__(self) -> None:
        self.actions_run: list[str] = []

    @decision_node("A", params=(0,))
    def task_a(self, a: str) -> bool:
        return a == "a"

    @decision_node("B", "G", params=(1,))
    def task_b(self, b: int) -> bool:
        return b == 5

    @action_node("C")
    def task_c(self) -> None:
        logger.info("Running action C")
        self.actions_run.append("C")

    @final_node("D")
    def task_d(self) -> Result:
        return Result.RESULT_X

    @final_node("E")
    def task_e(self) -> Result:
        return Result.RESULT_Y

    @final_node("F")
    def task_f(self) -> Result:
        return Result.RESULT_Z

    def build(self, a: str, b: int) -> Workflow:
        return (
            WorkflowBuilder.for_host(self, result_type=Result)
            .add_decision_node("A").true_outcome("B").false_outcome("G").commit()
            .add_decision_node("B").true_outcome("C").false_outcome("E").commit()
            .add_decision_node("G").true_outcome("E").false_outcome("F").commit()
            .add_action_node("C").outcome("D").commit()
            .build(a, b)
        )
