# core/saga.py

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from core.logging_config import logger


# ============================================================
# Saga: ordered steps with per-step compensations
# ============================================================
# Used where one logical operation spans two stores that share no
# transaction (Supabase Auth + PostgREST). If step N fails, the
# compensations of steps N-1..1 run in reverse order.
# ============================================================

@dataclass
class SagaStep:
    name: str
    action: Callable[[Dict[str, Any]], Any]
    compensate: Optional[Callable[[Dict[str, Any], Any], None]] = None


class SagaFailed(Exception):
    def __init__(self, step: str, cause: Exception, compensation_errors: Optional[List[str]] = None):
        self.step = step
        self.cause = cause
        self.compensation_errors = compensation_errors or []
        super().__init__(f"Saga step '{step}' failed: {cause}")


class Saga:
    def __init__(self, name: str, steps: List[SagaStep]):
        self.name = name
        self.steps = steps

    def run(self, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute every step, storing each result in context[step.name].
        Raises SagaFailed after compensating the completed steps.
        """
        context = dict(context or {})
        completed: List[SagaStep] = []

        for step in self.steps:
            try:
                context[step.name] = step.action(context)
            except Exception as e:
                logger.warning(f"[{self.name}] step '{step.name}' failed: {e}")
                errors = self._compensate(completed, context)
                raise SagaFailed(step.name, e, errors) from e
            completed.append(step)

        return context

    def _compensate(self, completed: List[SagaStep], context: Dict[str, Any]) -> List[str]:
        errors = []

        for step in reversed(completed):
            if step.compensate is None:
                continue
            try:
                step.compensate(context, context.get(step.name))
                logger.info(f"[{self.name}] compensated step '{step.name}'")
            except Exception as e:
                # Must not mask the original failure
                logger.error(f"[{self.name}] compensation for '{step.name}' failed: {e}")
                errors.append(f"{step.name}: {e}")

        return errors
