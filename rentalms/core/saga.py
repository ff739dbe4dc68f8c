"""
Follow-up steps that run after a primary write has committed.

There is no enclosing transaction: each step commits on its own, and a
step that fails is logged and skipped without undoing earlier steps.
The caller gets back which steps completed so it can report partial
success.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class SagaStep:
    name: str
    action: Callable[[], object]


@dataclass
class SagaResult:
    completed: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def run_saga(
    steps: list[SagaStep],
    on_failure: Optional[Callable[[], None]] = None,
    **log_context,
) -> SagaResult:
    """
    Run steps in order, logging failures instead of raising.

    Args:
        steps: Ordered follow-up steps
        on_failure: Called after a failed step (e.g. session rollback) so
            later steps start from a clean state
        log_context: Structured fields (tenant_id, unit_id, ...) added to log records

    Returns:
        SagaResult listing completed and failed step names
    """
    result = SagaResult()
    for step in steps:
        try:
            step.action()
        except Exception as e:
            logger.exception("Follow-up step '%s' failed", step.name, extra=log_context)
            result.failed[step.name] = str(e)
            if on_failure is not None:
                on_failure()
        else:
            result.completed.append(step.name)
    return result
