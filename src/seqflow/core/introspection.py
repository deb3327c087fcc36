# src/seqflow/core/introspection.py
"""
API de introspecção sobre Pipelines e Steps.

Consultas puras sobre valores: nenhuma função deste módulo consulta
estado global nem o `RunRegister`. Funções que aceitam `x` operam tanto
sobre um Step quanto sobre um Pipeline.

Semântica agregada para Pipelines:
    - not-started ⇔ todos os Steps em not-started
    - successful  ⇔ todos os Steps em successful
    - failed      ⇔ algum Step em failed

Campos condicionais levantam erro quando consultados fora do estado
em que são definidos:
    - `result` exige sucesso (`NotSuccessfulError`)
    - `failure_*` exigem um Step em falha (`NotFailedError`)
"""

from __future__ import annotations

from typing import Any, Hashable, List, Mapping, Optional, Tuple, Union

from seqflow.core.errors import NotFailedError, NotSuccessfulError, StepNotFoundError

from .pipeline.types import FailureReason, Pipeline, Step, StepState


def is_pipeline(x: Any) -> bool:
    return isinstance(x, Pipeline)


def is_step(x: Any) -> bool:
    return isinstance(x, Step)


def state(x: Union[Pipeline, Step]) -> StepState:
    return x.state


def is_not_started(x: Union[Pipeline, Step]) -> bool:
    if isinstance(x, Pipeline):
        return all(s.state == StepState.NOT_STARTED for s in x.steps)
    return x.state == StepState.NOT_STARTED


def is_successful(x: Union[Pipeline, Step]) -> bool:
    if isinstance(x, Pipeline):
        return bool(x.steps) and all(s.state == StepState.SUCCESSFUL for s in x.steps)
    return x.state == StepState.SUCCESSFUL


def is_failed(x: Union[Pipeline, Step]) -> bool:
    if isinstance(x, Pipeline):
        return any(s.state == StepState.FAILED for s in x.steps)
    return x.state == StepState.FAILED


def steps(pipeline: Pipeline) -> Tuple[Step, ...]:
    return pipeline.steps


def step(pipeline: Pipeline, name_or_index: Union[str, int]) -> Step:
    """
    Retorna o Step pelo nome ou pelo `seq_id`.

    Raises:
        StepNotFoundError: Se nenhum Step corresponder.
    """
    if isinstance(name_or_index, int) and not isinstance(name_or_index, bool):
        for s in pipeline.steps:
            if s.seq_id == name_or_index:
                return s
    else:
        for s in pipeline.steps:
            if s.name == name_or_index:
                return s
    raise StepNotFoundError(f"No step {name_or_index!r} in pipeline")


def step_name(s: Step) -> str:
    return s.name


def step_runs(pipeline: Pipeline) -> List[Step]:
    """Steps efetivamente executados na run (qualquer estado exceto not-started)."""
    return [s for s in pipeline.steps if s.state != StepState.NOT_STARTED]


def failed_steps(pipeline: Pipeline) -> List[Step]:
    """Steps em falha; a parada na primeira falha implica no máximo um."""
    return [s for s in pipeline.steps if s.state == StepState.FAILED]


def failed_step(pipeline: Pipeline) -> Optional[Step]:
    failed = failed_steps(pipeline)
    return failed[0] if failed else None


def _require_failed(s: Step) -> Step:
    if not isinstance(s, Step) or s.state != StepState.FAILED:
        name = getattr(s, "name", s)
        raise NotFailedError(f"Step {name!r} has not failed")
    return s


def failure_reason(s: Step) -> FailureReason:
    return _require_failed(s).failure_reason


def failure_value(s: Step) -> Any:
    return _require_failed(s).failure_value


def failure_message(s: Step) -> Any:
    return _require_failed(s).failure_message


def result(x: Union[Pipeline, Step]) -> Any:
    """
    Resultado de um Step ou Pipeline com sucesso.

    Para um Pipeline, é o resultado do último Step.

    Raises:
        NotSuccessfulError: Se `x` não estiver em `successful`.
    """
    if not is_successful(x):
        kind = "pipeline" if isinstance(x, Pipeline) else f"step {x.name!r}"
        raise NotSuccessfulError(f"The {kind} is not successful (state={x.state.value})")
    if isinstance(x, Pipeline):
        return x.steps[-1].result
    return x.result


def is_exception(x: Union[Pipeline, Step]) -> bool:
    """True se a falha (do Step ou do Pipeline) foi causada por exceção."""
    target = failed_step(x) if isinstance(x, Pipeline) else x
    return target is not None and target.failure_reason == FailureReason.EXCEPTION


def exception(x: Union[Pipeline, Step]) -> Optional[BaseException]:
    """A exceção levantada pela função do Step em falha, ou None."""
    if not is_exception(x):
        return None
    target = failed_step(x) if isinstance(x, Pipeline) else x
    return target.failure_value


def bindings(x: Union[Pipeline, Step]) -> Mapping[Hashable, Any]:
    return x.bindings


def args(pipeline: Pipeline) -> Optional[Mapping[Hashable, Any]]:
    """Args da run; None enquanto o Pipeline não foi executado."""
    return pipeline.args


def final_state(pipeline: Pipeline) -> Optional[Mapping[Hashable, Any]]:
    """Estado compartilhado ao final da run; None antes da run."""
    return pipeline.final_state
