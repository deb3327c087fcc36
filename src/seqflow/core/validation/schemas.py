# src/seqflow/core/validation/schemas.py
"""
Schemas de saída de Step: variante explícita e registro nomeado.

O schema de saída de um Step é representado por uma variante fechada:
    - `NoSchema`      → nenhum schema declarado (sem validação)
    - `InlineSchema`  → schema concreto fornecido na definição do Step
    - `SchemaRef`     → referência nomeada, resolvida via `SchemaRegistry`
                        imediatamente antes da validação

A referência nomeada permite que um schema seja registrado depois da
definição do Step que o utiliza. A resolução é sempre explícita: não há
registro global implícito, o registry é informado nas opções da run.

Invariantes:
    - Toda variante é imutável
    - `SchemaRegistry` rejeita nomes vazios
    - `resolve_schema(NO_SCHEMA, ...)` é sempre `None`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Union

from seqflow.core.errors import UnknownSchemaError


@dataclass(frozen=True)
class NoSchema:
    """Ausência de schema declarado."""


@dataclass(frozen=True)
class InlineSchema:
    schema: Any


@dataclass(frozen=True)
class SchemaRef:
    """Referência nomeada a um schema registrado em um `SchemaRegistry`."""

    name: str


Schema = Union[NoSchema, InlineSchema, SchemaRef]

NO_SCHEMA = NoSchema()


def as_schema(value: Any) -> Schema:
    """
    Converte o valor informado na definição do Step para a variante.

    - `None` → `NO_SCHEMA`
    - variante já construída → retornada sem alteração
    - qualquer outro valor → `InlineSchema(value)`
    """
    if value is None:
        return NO_SCHEMA
    if isinstance(value, (NoSchema, InlineSchema, SchemaRef)):
        return value
    return InlineSchema(value)


@dataclass
class SchemaRegistry:
    """
    Registro explícito de schemas nomeados.

    O registry pertence ao chamador e é passado ao Engine via
    `RunOptions.schemas`. O Engine apenas lê o registry; nunca registra.
    """

    _schemas: Dict[str, Any] = field(default_factory=dict, repr=False)

    def register(self, name: str, schema: Any) -> SchemaRef:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("schema name must be a non-empty string")
        self._schemas[name] = schema
        return SchemaRef(name)

    def has(self, name: str) -> bool:
        return name in self._schemas

    def get(self, name: str) -> Any:
        if name not in self._schemas:
            raise UnknownSchemaError(f"Unknown schema reference: {name!r}")
        return self._schemas[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)


def resolve_schema(schema: Schema, registry: Optional[SchemaRegistry]) -> Any:
    """
    Resolve a variante para o schema concreto usado na validação.

    Raises:
        UnknownSchemaError: Se a referência não existir no registry
            (ou se nenhum registry for informado).
    """
    if isinstance(schema, NoSchema):
        return None
    if isinstance(schema, InlineSchema):
        return schema.schema
    if registry is None:
        raise UnknownSchemaError(f"No schema registry to resolve {schema.name!r}")
    return registry.get(schema.name)
