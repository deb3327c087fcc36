# src/seqflow/core/pipeline/builder.py
"""
Composição de Pipelines (Builder).

Este módulo define `make`, o único ponto de construção de Pipelines do
seqflow, e o `StepRegistry` usado internamente para preservar ordem e
garantir unicidade de nomes.

Itens aceitos por `make`, achatados em ordem de encontro:
    - Step             → incluído como está
    - list/tuple       → elementos inseridos no lugar (recursivamente)
    - Pipeline         → contribui apenas seus Steps; os bindings de
                         nível de pipeline do item aninhado são descartados

Para cada Step resultante:
    - `seq_id` = posição final (0-based, contígua), sobrescrevendo
      qualquer índice anterior
    - estado reiniciado para `not-started`, descartando campos de runs
      anteriores (mesmo quando o Step vem de um Pipeline já executado)
    - bindings efetivos = merge(bindings do make, bindings do Step), com
      as chaves do próprio Step prevalecendo

Invariantes:
    - Pipelines construídos a partir de sequências achatadas equivalentes
      e bindings efetivos iguais são iguais, independente do aninhamento
    - Nenhum Pipeline inválido é retornado

Limites explícitos:
    - Não executa Steps
    - Não resolve schemas nomeados (isso ocorre na run)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Mapping

from seqflow.core.errors import DuplicateStepNameError, StepDefinitionError

from .step import validate_step
from .types import Pipeline, Step, StepState


@dataclass
class StepRegistry:
    """
    Registro ordenado de Steps com validação de nome único.

    A ordem de registro é preservada separadamente do índice por nome.
    """

    _steps: Dict[str, Step] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, step: Step) -> None:
        validate_step(step)

        if step.name in self._steps:
            raise DuplicateStepNameError(f"Duplicate step name: {step.name}")

        self._steps[step.name] = step
        self._order.append(step.name)

    def get(self, name: str) -> Step:
        return self._steps[name]

    def list(self) -> List[Step]:
        return [self._steps[name] for name in self._order]


def _flatten(items: Iterable[Any], trail: str) -> Iterator[Step]:
    for pos, item in enumerate(items):
        where = f"{trail}[{pos}]"
        if isinstance(item, Step):
            yield item
        elif isinstance(item, Pipeline):
            yield from item.steps
        elif isinstance(item, (list, tuple)):
            yield from _flatten(item, where)
        else:
            raise StepDefinitionError(
                f"item {where} is not a step, a list of steps or a pipeline: {item!r}"
            )


def _fresh(step: Step, seq_id: int, bindings: Mapping[Hashable, Any]) -> Step:
    return replace(
        step,
        seq_id=seq_id,
        bindings={**bindings, **step.bindings},
        state=StepState.NOT_STARTED,
        args=None,
        result=None,
        failure_reason=None,
        failure_value=None,
        failure_message=None,
        elapsed_ms=None,
    )


def make(bindings: Any = None, *items: Any) -> Pipeline:
    """
    Constrói um Pipeline a partir de Steps, listas de Steps e Pipelines.

    Exemplo:
        make({"url": "A"}, step_a, [step_b, step_c], other_pipeline)
        make(step_a, step_b)   # bindings omitidos

    Args:
        bindings: Bindings de nível de pipeline; também mesclados em cada
            Step (as chaves do Step prevalecem). Opcional: se o primeiro
            argumento for um Step, Pipeline ou lista/tupla, ele é tratado
            como item e os bindings são `{}`.
        *items: Steps, listas/tuplas de Steps ou Pipelines.

    Returns:
        Pipeline: Template pronto para `run`.

    Raises:
        StepDefinitionError: Item de tipo não suportado ou Step malformado.
        DuplicateStepNameError: Dois Steps com o mesmo nome.
    """
    if isinstance(bindings, (Step, Pipeline, list, tuple)):
        items = (bindings,) + items
        bindings = None
    if bindings is None:
        bindings = {}
    if not isinstance(bindings, Mapping):
        raise StepDefinitionError(f"pipeline bindings must be a mapping, got {bindings!r}")

    registry = StepRegistry()
    for seq_id, step in enumerate(_flatten(items, "items")):
        registry.add(_fresh(step, seq_id, bindings))

    return Pipeline(steps=tuple(registry.list()), bindings=dict(bindings))


def validate_pipeline(pipeline: Any) -> Pipeline:
    """
    Valida as invariantes estruturais de um Pipeline.

    Verificado:
        - tipo Pipeline e ao menos um Step
        - cada Step estruturalmente válido
        - nomes únicos
        - `seq_id` contíguo 0..n-1 na ordem dos Steps

    Raises:
        PipelineDefinitionError (ou subclasse) na primeira violação.
    """
    if not isinstance(pipeline, Pipeline):
        raise StepDefinitionError(f"Not a pipeline: {pipeline!r}")

    if not pipeline.steps:
        raise StepDefinitionError("pipeline has no steps")

    registry = StepRegistry()
    for expected, step in enumerate(pipeline.steps):
        registry.add(step)
        if step.seq_id != expected:
            raise StepDefinitionError(
                f"Step {step.name!r}: seq_id {step.seq_id!r} does not match position {expected}; "
                "build pipelines with make()"
            )

    return pipeline
