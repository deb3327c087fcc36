# src/seqflow/core/engine/engine.py
"""
Engine de execução do pipeline do seqflow.

O Engine conduz a run de forma **sequencial e síncrona**, na thread do
chamador: um Step por vez, na ordem de `seq_id`, parando na primeira falha.

Fluxo de `run(pipeline, args, options)`:
    1. Valida a estrutura do Pipeline e exige todos os Steps em `not-started`
       (erro fatal, levantado; não há retomada a partir de uma falha)
    2. Estado inicial = merge(bindings do pipeline, args); args prevalecem
    3. Para o próximo Step em `not-started`:
        - mescla os bindings do Step no estado (ver `BindingPrecedence`)
        - resolve os argumentos pelos paths de entrada
        - executa o Step (`run_step`)
        - em sucesso com `output_path`, escreve o resultado no estado
        - em falha, interrompe; os Steps seguintes permanecem `not-started`
    4. Sintetiza o resumo do Pipeline a partir do último Step executado

Taxonomia de falhas (registradas no Step, nunca levantadas por `run`):
    - invalid-output: resultado rejeitado pela validação do schema
    - exception: a função levantou exceção

Decisões arquiteturais:
    - O template recebido nunca é mutado; a run retorna uma nova cópia
    - O tempo medido em `Step.elapsed_ms` cobre apenas a invocação da função
    - Falhas na resolução de argumentos (ex.: valor diferido que termina
      com exceção) são registradas como `exception` do Step dependente
    - O RunRegister e o RunLog são opcionais e pertencem ao chamador

Limites explícitos:
    - Sem paralelismo, retry, timeout ou retomada a partir de falha
    - Não interpreta o diagnóstico da validação
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Dict, Hashable, List, Optional, Union

from seqflow.core.errors import PipelineDefinitionError, StepDefinitionError, UnknownSchemaError
from seqflow.core.paths import PathError, get_in, set_in
from seqflow.core.pipeline.builder import validate_pipeline
from seqflow.core.pipeline.types import FailureReason, Pipeline, Step, StepState
from seqflow.core.register import RunRegister
from seqflow.core.traceability import run_log as events
from seqflow.core.traceability.run_log import RunLog
from seqflow.core.validation import NoSchema, SchemaRef, ValidationContext, resolve_schema

from .options import BindingPrecedence, RunOptions, coerce_options


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


def _failed(
    step: Step,
    *,
    args: Any,
    reason: FailureReason,
    value: Any,
    message: Any,
    elapsed_ms: Optional[float],
) -> Step:
    return replace(
        step,
        state=StepState.FAILED,
        args=args,
        result=None,
        failure_reason=reason,
        failure_value=value,
        failure_message=message,
        elapsed_ms=elapsed_ms,
    )


def run_step(
    step: Step,
    state: Mapping[Hashable, Any],
    options: Union[RunOptions, Mapping[str, Any], None] = None,
) -> Step:
    """
    Executa um único Step contra o estado informado e retorna o Step atualizado.

    Normalmente chamado por `run`; é público por ser útil durante o
    desenvolvimento (ex.: reexecutar um Step isolado com um estado
    montado à mão). Os bindings do Step **não** são mesclados aqui.

    Raises:
        StepDefinitionError: Se o Step não estiver em `not-started`.
        UnknownSchemaError: Se o `SchemaRef` não puder ser resolvido.
    """
    opts = coerce_options(options)

    if step.state != StepState.NOT_STARTED:
        raise StepDefinitionError(f"Step {step.name!r} already ran (state={step.state.value})")

    try:
        args = tuple(
            get_in(state, path, await_deferred=opts.allow_async_args) for path in step.input_paths
        )
    except Exception as e:  # noqa: BLE001
        return _failed(step, args=None, reason=FailureReason.EXCEPTION, value=e, message=str(e), elapsed_ms=None)

    start = time.perf_counter()
    try:
        value = step.function(*args)
    except Exception as e:  # noqa: BLE001
        return _failed(
            step,
            args=args,
            reason=FailureReason.EXCEPTION,
            value=e,
            message=str(e),
            elapsed_ms=_elapsed_ms(start),
        )
    elapsed = _elapsed_ms(start)

    if not isinstance(step.output_schema, NoSchema):
        schema = resolve_schema(step.output_schema, opts.schemas)
        ctx = ValidationContext(step_name=step.name, state=state)
        try:
            valid = step.validation.is_valid(ctx, schema, value)
            message = None if valid else step.validation.explain(ctx, schema, value)
        except Exception as e:  # noqa: BLE001
            # erro da própria validação: falha do Step, nunca da run
            return _failed(
                step,
                args=args,
                reason=FailureReason.EXCEPTION,
                value=e,
                message=str(e),
                elapsed_ms=elapsed,
            )
        if not valid:
            return _failed(
                step,
                args=args,
                reason=FailureReason.INVALID_OUTPUT,
                value=value,
                message=message,
                elapsed_ms=elapsed,
            )

    return replace(step, state=StepState.SUCCESSFUL, args=args, result=value, elapsed_ms=elapsed)


def _merge_step_bindings(
    state: Dict[Hashable, Any],
    step: Step,
    args: Mapping[Hashable, Any],
    precedence: BindingPrecedence,
) -> Dict[Hashable, Any]:
    if not step.bindings:
        return state
    if precedence == BindingPrecedence.STEP_BINDINGS:
        return {**state, **step.bindings}
    return {**state, **{k: v for k, v in step.bindings.items() if k not in args}}


def _next_pending(steps: List[Step]) -> Optional[int]:
    for i, s in enumerate(steps):
        if s.state == StepState.NOT_STARTED:
            return i
    return None


def _check_fresh(pipeline: Pipeline) -> None:
    ran = [s.name for s in pipeline.steps if s.state != StepState.NOT_STARTED]
    if ran:
        raise PipelineDefinitionError(
            f"pipeline already ran (steps not in not-started: {', '.join(ran)}); "
            "rebuild it with make() to run again"
        )


def _check_schema_refs(pipeline: Pipeline, options: RunOptions) -> None:
    for s in pipeline.steps:
        ref = s.output_schema
        if isinstance(ref, SchemaRef) and (options.schemas is None or not options.schemas.has(ref.name)):
            raise UnknownSchemaError(f"Step {s.name!r}: unknown schema reference {ref.name!r}")


def _summarize(
    pipeline: Pipeline,
    steps: List[Step],
    args: Dict[Hashable, Any],
    final_state: Dict[Hashable, Any],
    elapsed_ms: float,
) -> Pipeline:
    executed = [s for s in steps if s.state != StepState.NOT_STARTED]
    last = executed[-1] if executed else None

    finished = replace(
        pipeline,
        steps=tuple(steps),
        args=args,
        final_state=final_state,
        result=None,
        failure_reason=None,
        failure_value=None,
        failure_message=None,
        elapsed_ms=elapsed_ms,
    )
    if last is None:
        return finished

    if last.state == StepState.FAILED:
        return replace(
            finished,
            failure_reason=last.failure_reason,
            failure_value=last.failure_value,
            failure_message=last.failure_message,
        )
    return replace(finished, result=last.result)


def run(
    pipeline: Pipeline,
    args: Mapping[Hashable, Any],
    options: Union[RunOptions, Mapping[str, Any], None] = None,
    *,
    register: Optional[RunRegister] = None,
    log: Optional[RunLog] = None,
) -> Pipeline:
    """
    Executa o Pipeline contra `args` e retorna o Pipeline finalizado.

    Args:
        pipeline: Template construído com `make`.
        args: Valores iniciais do estado compartilhado.
        options: `RunOptions` ou mapa equivalente.
        register: Handle opcional atualizado com o Pipeline finalizado.
        log: RunLog opcional que recebe os eventos da execução.

    Returns:
        Pipeline: Nova cópia com o trace por Step e o resumo da run.

    Raises:
        PipelineDefinitionError: Pipeline, args ou options estruturalmente
            inválidos, ou Pipeline já executado. Falhas de dados nunca
            são levantadas.
    """
    validate_pipeline(pipeline)
    _check_fresh(pipeline)
    opts = coerce_options(options)
    if not isinstance(args, Mapping):
        raise PipelineDefinitionError(f"args must be a mapping, got {type(args).__name__}")
    _check_schema_refs(pipeline, opts)

    run_args: Dict[Hashable, Any] = dict(args)
    state: Dict[Hashable, Any] = {**pipeline.bindings, **run_args}
    steps = list(pipeline.steps)

    started = time.perf_counter()
    if log is not None:
        events.run_started(log, steps=len(steps))

    while True:
        idx = _next_pending(steps)
        if idx is None:
            break

        step = steps[idx]
        state = _merge_step_bindings(state, step, run_args, opts.binding_precedence)

        if log is not None:
            events.step_started(log, step_name=step.name, seq_id=step.seq_id, kind=step.kind.value)

        done = run_step(step, state, opts)

        if done.state == StepState.SUCCESSFUL and done.output_path is not None:
            try:
                state = set_in(state, done.output_path, done.result)
            except PathError as e:
                done = _failed(
                    step,
                    args=done.args,
                    reason=FailureReason.EXCEPTION,
                    value=e,
                    message=str(e),
                    elapsed_ms=done.elapsed_ms,
                )

        steps[idx] = done

        if done.state == StepState.FAILED:
            if log is not None:
                events.step_failed(
                    log,
                    step_name=done.name,
                    reason=done.failure_reason.value,
                    message=done.failure_message,
                    elapsed_ms=done.elapsed_ms,
                )
            break

        if log is not None:
            events.step_finished(log, step_name=done.name, elapsed_ms=done.elapsed_ms)

    finished = _summarize(pipeline, steps, run_args, state, _elapsed_ms(started))

    if log is not None:
        events.run_finished(log, state=finished.state.value, elapsed_ms=finished.elapsed_ms)
    if register is not None:
        register.record(finished)

    return finished
