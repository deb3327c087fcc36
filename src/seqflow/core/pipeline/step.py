# src/seqflow/core/pipeline/step.py
"""
Construtores canônicos de Step do seqflow.

Este módulo define a API pública de construção de Steps (`action`,
`transformation`) e a validação estrutural aplicada a qualquer Step,
inclusive instâncias construídas diretamente via `Step(...)`.

Contrato posicional (idêntico para ambos os construtores):
    (name, function, input_paths, output_path=None, output_schema=None,
     bindings=None, validation=None)

Responsabilidades:
    - normalizar paths de entrada e saída
    - converter o schema informado para a variante explícita
    - rejeitar schemas inline de forma não suportada pela validação padrão
      (capacidades customizadas definem suas próprias formas)
    - verificar aridade da função contra `len(input_paths)` quando a
      assinatura é inspecionável

Princípios fundamentais:
    - Erros estruturais são fatais e levantados na construção
    - O tipo do Step (`kind`) não altera execução
    - Funções sem assinatura inspecionável (ex.: alguns builtins) têm a
      aridade verificada apenas na invocação

Limites explícitos:
    - Não atribui `seq_id` (responsabilidade do Builder)
    - Não executa a função
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any, Callable, Hashable, Optional, Sequence

from seqflow.core.errors import InvalidPathError, StepDefinitionError
from seqflow.core.paths import Path, normalize_path
from seqflow.core.validation import (
    DEFAULT_VALIDATION,
    DefaultValidation,
    InlineSchema,
    ValidationCapability,
    as_schema,
    check_schema,
)

from .types import Step, StepKind, StepState


def _check_arity(name: str, function: Callable[..., Any], arity: int) -> None:
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return

    try:
        signature.bind(*([None] * arity))
    except TypeError as e:
        raise StepDefinitionError(
            f"Step {name!r}: function {getattr(function, '__name__', function)!r} "
            f"cannot be called with {arity} positional argument(s): {e}"
        ) from e


def validate_step(step: Any) -> Step:
    """
    Valida a estrutura de um Step e o retorna sem alterações.

    Raises:
        StepDefinitionError: Se algum campo obrigatório for inválido.
        InvalidPathError: Se algum path estiver vazio.
    """
    if not isinstance(step, Step):
        raise StepDefinitionError(f"Not a step: {step!r}")

    if not isinstance(step.name, str) or not step.name.strip():
        raise StepDefinitionError(f"step name must be a non-empty string, got {step.name!r}")

    if not isinstance(step.kind, StepKind):
        raise StepDefinitionError(f"Step {step.name!r}: invalid kind {step.kind!r}")

    if not callable(step.function):
        raise StepDefinitionError(f"Step {step.name!r}: function is not callable")

    if not isinstance(step.input_paths, tuple):
        raise StepDefinitionError(f"Step {step.name!r}: input_paths must be a tuple of paths")
    for p in step.input_paths:
        if not isinstance(p, tuple) or not p:
            raise InvalidPathError(f"Step {step.name!r}: invalid input path {p!r}")

    if step.output_path is not None and (not isinstance(step.output_path, tuple) or not step.output_path):
        raise InvalidPathError(f"Step {step.name!r}: output path must be a non-empty path")

    if not isinstance(step.bindings, Mapping):
        raise StepDefinitionError(f"Step {step.name!r}: bindings must be a mapping")

    if not isinstance(step.validation, ValidationCapability):
        raise StepDefinitionError(
            f"Step {step.name!r}: validation must provide is_valid(...) and explain(...)"
        )

    if not isinstance(step.state, StepState):
        raise StepDefinitionError(f"Step {step.name!r}: invalid state {step.state!r}")

    return step


def _make_step(
    kind: StepKind,
    name: str,
    function: Callable[..., Any],
    input_paths: Sequence[Path],
    output_path: Optional[Path] = None,
    output_schema: Any = None,
    bindings: Optional[Mapping[Hashable, Any]] = None,
    validation: Optional[ValidationCapability] = None,
) -> Step:
    if isinstance(input_paths, (str, bytes)) or not isinstance(input_paths, Sequence):
        raise StepDefinitionError(f"Step {name!r}: input_paths must be a list of paths")

    try:
        inputs = tuple(normalize_path(p) for p in input_paths)
        output = normalize_path(output_path) if output_path is not None else None
    except InvalidPathError as e:
        raise InvalidPathError(f"Step {name!r}: {e}") from e

    if bindings is not None and not isinstance(bindings, Mapping):
        raise StepDefinitionError(f"Step {name!r}: bindings must be a mapping")

    step = Step(
        name=name,
        kind=kind,
        function=function,
        input_paths=inputs,
        output_path=output,
        output_schema=as_schema(output_schema),
        bindings=dict(bindings or {}),
        validation=validation if validation is not None else DEFAULT_VALIDATION,
    )
    validate_step(step)
    if isinstance(step.validation, DefaultValidation) and isinstance(step.output_schema, InlineSchema):
        try:
            check_schema(step.output_schema.schema)
        except TypeError as e:
            raise StepDefinitionError(f"Step {name!r}: {e}") from e
    _check_arity(name, function, len(inputs))
    return step


def action(
    name: str,
    function: Callable[..., Any],
    input_paths: Sequence[Path],
    output_path: Optional[Path] = None,
    output_schema: Any = None,
    bindings: Optional[Mapping[Hashable, Any]] = None,
    validation: Optional[ValidationCapability] = None,
) -> Step:
    """
    Cria um Step do tipo `action` (tipicamente com efeitos de I/O).

    Args:
        name: Nome único do Step no pipeline.
        function: Callable invocado com os argumentos resolvidos, em ordem.
        input_paths: Paths lidos do estado (chave simples ou sequência).
        output_path: Path onde o resultado é escrito; None para não escrever.
        output_schema: Schema concreto, `SchemaRef` ou None.
        bindings: Valores mesclados no estado imediatamente antes do Step.
        validation: Capacidade de validação; padrão `DEFAULT_VALIDATION`.

    Raises:
        StepDefinitionError: Campos inválidos ou aridade incompatível.
        InvalidPathError: Path vazio.
    """
    return _make_step(
        StepKind.ACTION, name, function, input_paths, output_path, output_schema, bindings, validation
    )


def transformation(
    name: str,
    function: Callable[..., Any],
    input_paths: Sequence[Path],
    output_path: Optional[Path] = None,
    output_schema: Any = None,
    bindings: Optional[Mapping[Hashable, Any]] = None,
    validation: Optional[ValidationCapability] = None,
) -> Step:
    """Cria um Step do tipo `transformation`; contrato idêntico a `action`."""
    return _make_step(
        StepKind.TRANSFORMATION, name, function, input_paths, output_path, output_schema, bindings, validation
    )
