# src/seqflow/core/validation/capability.py
"""
Capacidade de validação plugável.

Este módulo define o contrato que o Engine utiliza para verificar a saída
de um Step contra o schema declarado, e a implementação padrão fornecida
pelo seqflow.

O contrato é um par de operações:
    - `is_valid(context, schema, value) -> bool`
    - `explain(context, schema, value) -> diagnóstico`

O diagnóstico é opaco para o Engine: ele apenas o armazena em
`failure_message` e o repassa para camadas externas de relatório.

Implementação padrão (`DEFAULT_VALIDATION`), sem dependências externas:
    - tipo ou tupla de tipos → `isinstance` (bool não é aceito como
      int/float)
    - callable → predicado, `bool(schema(value))`
    - dict → o valor deve ser um mapa contendo todas as chaves, cada uma
      válida contra o sub-schema correspondente

Limites explícitos:
    - Não resolve `SchemaRef` (responsabilidade do Engine)
    - Não levanta exceção para valores inválidos
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, Tuple, runtime_checkable


@dataclass(frozen=True)
class ValidationContext:
    """Contexto informado à capacidade de validação."""

    step_name: str
    state: Mapping


@runtime_checkable
class ValidationCapability(Protocol):
    def is_valid(self, context: ValidationContext, schema: Any, value: Any) -> bool:
        ...

    def explain(self, context: ValidationContext, schema: Any, value: Any) -> Any:
        ...


def _describe(schema: Any) -> str:
    if isinstance(schema, type):
        return schema.__name__
    if isinstance(schema, tuple):
        return " | ".join(_describe(s) for s in schema)
    name = getattr(schema, "__name__", None)
    return name if name else repr(schema)


def _type_matches(types: Tuple[type, ...], value: Any) -> bool:
    if isinstance(value, bool) and bool not in types:
        return False
    return isinstance(value, types)


def _problems(schema: Any, value: Any, path: List[Any]) -> List[Dict[str, Any]]:
    if isinstance(schema, type) or (
        isinstance(schema, tuple) and all(isinstance(s, type) for s in schema)
    ):
        types = schema if isinstance(schema, tuple) else (schema,)
        if _type_matches(types, value):
            return []
        return [{"path": list(path), "expected": _describe(schema), "actual": value}]

    if isinstance(schema, Mapping):
        if not isinstance(value, Mapping):
            return [{"path": list(path), "expected": "mapping", "actual": value}]
        problems: List[Dict[str, Any]] = []
        for key, sub in schema.items():
            if key not in value:
                problems.append({"path": list(path) + [key], "expected": "present", "actual": None})
                continue
            problems.extend(_problems(sub, value[key], list(path) + [key]))
        return problems

    if callable(schema):
        try:
            ok = bool(schema(value))
        except Exception as e:  # noqa: BLE001
            # predicado que falha conta como valor inválido
            return [{"path": list(path), "expected": _describe(schema), "actual": value, "error": str(e)}]
        if ok:
            return []
        return [{"path": list(path), "expected": _describe(schema), "actual": value}]

    raise TypeError(f"Unsupported schema: {schema!r}")


def check_schema(schema: Any) -> None:
    """
    Verifica se `schema` tem uma forma suportada pela validação padrão.

    Raises:
        TypeError: Se algum nó do schema não for tipo, tupla de tipos,
            callable ou dict de sub-schemas.
    """
    if isinstance(schema, type) or callable(schema):
        return
    if isinstance(schema, tuple) and schema and all(isinstance(s, type) for s in schema):
        return
    if isinstance(schema, Mapping):
        for sub in schema.values():
            check_schema(sub)
        return
    raise TypeError(f"Unsupported schema: {schema!r}")


class DefaultValidation:
    """Validação padrão baseada em tipos, predicados e mapas."""

    def is_valid(self, context: ValidationContext, schema: Any, value: Any) -> bool:
        return not _problems(schema, value, [])

    def explain(self, context: ValidationContext, schema: Any, value: Any) -> Dict[str, Any]:
        return {
            "step": context.step_name,
            "schema": _describe(schema),
            "value": value,
            "problems": _problems(schema, value, []),
        }

    def __repr__(self) -> str:
        return "DefaultValidation()"


DEFAULT_VALIDATION = DefaultValidation()
