# src/seqflow/__init__.py
"""
seqflow — executor declarativo de pipelines sequenciais.

Uma computação é descrita como uma lista ordenada de Steps nomeados. Cada
Step lê valores de um estado compartilhado via paths simbólicos, produz
um resultado escrito de volta em um path declarado e pode ser validado
contra um schema plugável.

Uso típico:

    from seqflow import action, transformation, make, run, result

    pipeline = make(
        {},
        action("load", load_balances, ["user_id"], "balances"),
        transformation("total", sum_balances, ["balances"], "total", float),
    )
    finished = run(pipeline, {"user_id": 2})
    result(finished)

Arquitetura em alto nível:
    - core.pipeline      → Step, Pipeline, action, transformation, make
    - core.engine        → run, run_step, RunOptions
    - core.introspection → consultas sobre o Pipeline finalizado
    - report             → renderização textual/HTML de runs
"""

from .core.engine import BindingPrecedence, RunOptions, run, run_step
from .core.errors import (
    DuplicateStepNameError,
    InvalidPathError,
    NotFailedError,
    NotSuccessfulError,
    PipelineDefinitionError,
    RunOptionsError,
    StepDefinitionError,
    StepNotFoundError,
    UnknownSchemaError,
)
from .core.exceptions import SeqflowException
from .core.introspection import (
    args,
    bindings,
    exception,
    failed_step,
    failed_steps,
    failure_message,
    failure_reason,
    failure_value,
    final_state,
    is_exception,
    is_failed,
    is_not_started,
    is_pipeline,
    is_step,
    is_successful,
    result,
    state,
    step,
    step_name,
    step_runs,
    steps,
)
from .core.pipeline import (
    FailureReason,
    Pipeline,
    Step,
    StepKind,
    StepState,
    action,
    make,
    transformation,
)
from .core.register import RunRegister
from .core.traceability import RunLog, create_run_log
from .core.validation import (
    DEFAULT_VALIDATION,
    SchemaRef,
    SchemaRegistry,
    ValidationCapability,
    ValidationContext,
)

__version__ = "0.1.0"

__all__ = [
    "BindingPrecedence",
    "DEFAULT_VALIDATION",
    "DuplicateStepNameError",
    "FailureReason",
    "InvalidPathError",
    "NotFailedError",
    "NotSuccessfulError",
    "Pipeline",
    "PipelineDefinitionError",
    "RunLog",
    "RunOptions",
    "RunOptionsError",
    "RunRegister",
    "SchemaRef",
    "SchemaRegistry",
    "SeqflowException",
    "Step",
    "StepDefinitionError",
    "StepKind",
    "StepNotFoundError",
    "StepState",
    "UnknownSchemaError",
    "ValidationCapability",
    "ValidationContext",
    "action",
    "args",
    "bindings",
    "create_run_log",
    "exception",
    "failed_step",
    "failed_steps",
    "failure_message",
    "failure_reason",
    "failure_value",
    "final_state",
    "is_exception",
    "is_failed",
    "is_not_started",
    "is_pipeline",
    "is_step",
    "is_successful",
    "make",
    "result",
    "run",
    "run_step",
    "state",
    "step",
    "step_name",
    "step_runs",
    "steps",
    "transformation",
]
