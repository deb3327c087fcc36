# src/seqflow/core/pipeline/types.py
"""
Tipos canônicos do pipeline do seqflow.

Este módulo define as estruturas e enums fundamentais do modelo de dados:

Componentes principais:
    - StepKind      → classificação descritiva (action, transformation)
    - StepState     → estados do Step (not-started, successful, failed)
    - FailureReason → taxonomia de falhas (invalid-output, exception)
    - Step          → unidade atômica, imutável, com campos pós-run
    - Pipeline      → sequência ordenada de Steps + bindings + resumo da run

Princípios fundamentais:
    - Steps e Pipelines são valores imutáveis (frozen dataclasses)
    - Uma run produz uma **nova** cópia; o template nunca é alterado
    - Campos de tempo não participam da igualdade estrutural
    - Nenhuma lógica de execução vive neste módulo

Invariantes:
    - Enums possuem valores textuais canônicos
    - `seq_id` só é atribuído pelo Builder
    - Transições de estado são exatamente not-started → {successful|failed}

Limites explícitos:
    - Não executa Steps
    - Não valida estrutura (ver `step.validate_step` e `builder.make`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Hashable, Mapping, Optional, Tuple

from seqflow.core.validation import (
    DEFAULT_VALIDATION,
    NO_SCHEMA,
    Schema,
    ValidationCapability,
)


class StepKind(str, Enum):
    """
    Tipos descritivos de Steps no pipeline.

    O tipo é puramente informativo: o Engine executa `action` e
    `transformation` exatamente da mesma forma. A distinção existe para
    leitura do pipeline e relatórios (ex.: ações fazem I/O, transformações
    são funções puras sobre o estado).
    """
    ACTION = "action"
    TRANSFORMATION = "transformation"


class StepState(str, Enum):
    """
    Estados possíveis de um Step.

    Transições permitidas:
        NOT_STARTED → SUCCESSFUL
        NOT_STARTED → FAILED

    Estados terminais não possuem reentrada.
    """
    NOT_STARTED = "not-started"
    SUCCESSFUL = "successful"
    FAILED = "failed"


class FailureReason(str, Enum):
    """
    Taxonomia de falhas de dados durante a execução de um Step.

        - INVALID_OUTPUT: a função retornou, mas o resultado não passou
          na validação do schema declarado
        - EXCEPTION: a função levantou exceção durante a invocação
    """
    INVALID_OUTPUT = "invalid-output"
    EXCEPTION = "exception"


PathTuple = Tuple[Hashable, ...]


@dataclass(frozen=True)
class Step:
    """
    Unidade atômica e nomeada de computação.

    Campos de definição:
        - name: identificador único dentro do Pipeline
        - kind: classificação descritiva (`StepKind`)
        - function: callable com aridade igual a `len(input_paths)`
        - input_paths: paths normalizados lidos do estado, em ordem
        - output_path: path normalizado onde o resultado é escrito, ou None
        - output_schema: variante de schema (`NoSchema | InlineSchema | SchemaRef`)
        - bindings: valores mesclados no estado imediatamente antes do Step
        - validation: capacidade de validação usada com `output_schema`
        - seq_id: posição 0-based atribuída pelo Builder

    Campos pós-run:
        - state, args, result, elapsed_ms
        - failure_reason, failure_value, failure_message (apenas em falha)

    `elapsed_ms` não participa da igualdade: duas runs determinísticas do
    mesmo template produzem Steps iguais.
    """

    name: str
    kind: StepKind
    function: Callable[..., Any]
    input_paths: Tuple[PathTuple, ...] = ()
    output_path: Optional[PathTuple] = None
    output_schema: Schema = NO_SCHEMA
    bindings: Mapping[Hashable, Any] = field(default_factory=dict)
    validation: ValidationCapability = DEFAULT_VALIDATION
    seq_id: Optional[int] = None

    state: StepState = StepState.NOT_STARTED
    args: Optional[Tuple[Any, ...]] = None
    result: Any = None
    failure_reason: Optional[FailureReason] = None
    failure_value: Any = None
    failure_message: Any = None
    elapsed_ms: Optional[float] = field(default=None, compare=False)


@dataclass(frozen=True)
class Pipeline:
    """
    Sequência ordenada de Steps com bindings de nível de pipeline.

    Antes da run, o Pipeline é um template (`args is None`, todos os Steps
    em `not-started`). Após a run, é um valor completamente avaliado:
    `final_state` guarda o estado compartilhado ao final da run e o
    resumo espelha o último Step executado:
        - sucesso → `result` do último Step
        - falha   → `failure_reason/value/message` do Step que falhou

    `elapsed_ms` cobre a run inteira e não participa da igualdade.
    """

    steps: Tuple[Step, ...] = ()
    bindings: Mapping[Hashable, Any] = field(default_factory=dict)
    args: Optional[Mapping[Hashable, Any]] = None
    final_state: Optional[Mapping[Hashable, Any]] = None

    result: Any = None
    failure_reason: Optional[FailureReason] = None
    failure_value: Any = None
    failure_message: Any = None
    elapsed_ms: Optional[float] = field(default=None, compare=False)

    @property
    def state(self) -> StepState:
        """Estado agregado: failed se algum Step falhou; successful se todos tiveram sucesso."""
        states = [s.state for s in self.steps]
        if any(st == StepState.FAILED for st in states):
            return StepState.FAILED
        if states and all(st == StepState.SUCCESSFUL for st in states):
            return StepState.SUCCESSFUL
        return StepState.NOT_STARTED
