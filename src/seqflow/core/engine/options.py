# src/seqflow/core/engine/options.py
"""
Opções de execução de uma run.

Opções reconhecidas:
    - allow_async_args: aguarda valores diferidos (`Future`) encontrados
      nos paths de entrada antes de passá-los à função do Step. A espera é
      bloqueante, sem timeout e sem cancelamento.
    - binding_precedence: política de merge dos bindings de Step sobre o
      estado (ver `BindingPrecedence`).
    - schemas: `SchemaRegistry` usado para resolver `SchemaRef`.

Opções podem ser informadas como `RunOptions` ou como mapa com as mesmas
chaves; chaves desconhecidas são rejeitadas.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Optional, Union

from seqflow.core.errors import RunOptionsError
from seqflow.core.validation import SchemaRegistry


class BindingPrecedence(str, Enum):
    """
    Política de precedência entre bindings de Step e args da run.

        - STEP_BINDINGS: bindings do Step sobrescrevem qualquer chave já
          presente no estado, inclusive as vindas dos args (padrão)
        - ARGS: chaves fornecidas nos args da run não são sobrescritas por
          bindings de Step; demais chaves seguem a política padrão
    """
    STEP_BINDINGS = "step-bindings"
    ARGS = "args"


@dataclass(frozen=True)
class RunOptions:
    allow_async_args: bool = False
    binding_precedence: BindingPrecedence = BindingPrecedence.STEP_BINDINGS
    schemas: Optional[SchemaRegistry] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RunOptions":
        """
        Constrói RunOptions a partir de um mapa (ex.: seção `engine` da config).

        Raises:
            RunOptionsError: Chave desconhecida ou valor de tipo inválido.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(k) for k in data if k not in known)
        if unknown:
            raise RunOptionsError(f"Unknown run option(s): {', '.join(unknown)}")

        allow_async_args = data.get("allow_async_args", False)
        if not isinstance(allow_async_args, bool):
            raise RunOptionsError(f"allow_async_args must be a boolean, got {allow_async_args!r}")

        raw_precedence = data.get("binding_precedence", BindingPrecedence.STEP_BINDINGS)
        try:
            precedence = BindingPrecedence(raw_precedence)
        except ValueError as e:
            allowed = [p.value for p in BindingPrecedence]
            raise RunOptionsError(
                f"binding_precedence must be one of {allowed}, got {raw_precedence!r}"
            ) from e

        schemas = data.get("schemas")
        if schemas is not None and not isinstance(schemas, SchemaRegistry):
            raise RunOptionsError("schemas must be a SchemaRegistry")

        return cls(allow_async_args=allow_async_args, binding_precedence=precedence, schemas=schemas)


def coerce_options(options: Union[RunOptions, Mapping[str, Any], None]) -> RunOptions:
    if options is None:
        return RunOptions()
    if isinstance(options, RunOptions):
        return options
    if isinstance(options, Mapping):
        return RunOptions.from_mapping(options)
    raise RunOptionsError(f"options must be RunOptions or a mapping, got {type(options).__name__}")
