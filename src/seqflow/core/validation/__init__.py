# src/seqflow/core/validation/__init__.py
"""
Validação de saída de Steps.

- capability → contrato `ValidationCapability` e implementação padrão
- schemas    → variante `NoSchema | InlineSchema | SchemaRef` e `SchemaRegistry`
"""

from .capability import (
    DEFAULT_VALIDATION,
    DefaultValidation,
    ValidationCapability,
    ValidationContext,
    check_schema,
)
from .schemas import (
    NO_SCHEMA,
    InlineSchema,
    NoSchema,
    Schema,
    SchemaRef,
    SchemaRegistry,
    as_schema,
    resolve_schema,
)

__all__ = [
    "DEFAULT_VALIDATION",
    "DefaultValidation",
    "ValidationCapability",
    "ValidationContext",
    "check_schema",
    "NO_SCHEMA",
    "InlineSchema",
    "NoSchema",
    "Schema",
    "SchemaRef",
    "SchemaRegistry",
    "as_schema",
    "resolve_schema",
]
