# src/seqflow/core/traceability/__init__.py
"""
Rastreabilidade de execução do seqflow.

Expõe o `RunLog` (Event Log estruturado de uma run) e sua API explícita
de registro de eventos.
"""

from .run_log import (
    RunLog,
    add_event,
    create_run_log,
    run_finished,
    run_started,
    step_failed,
    step_finished,
    step_started,
)

__all__ = [
    "RunLog",
    "add_event",
    "create_run_log",
    "run_finished",
    "run_started",
    "step_failed",
    "step_finished",
    "step_started",
]
