# src/seqflow/core/exceptions.py
"""
seqflow — Exceção tipada com payload estruturado.

Funções de Step podem falhar levantando qualquer exceção; o Engine
registra a exceção como `failure_value` e `str(exc)` como
`failure_message`. Quando a falha precisa carregar dados estruturados
para diagnóstico, a função deve levantar `SeqflowException`.

Regras:
- `message` é curta e humana
- `details` contém apenas dados estruturados
- Não embedar stack trace em `details`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SeqflowException(Exception):
    """Exceção com mensagem e payload estruturado (`details`).

    Exemplo:
        raise SeqflowException("Problem!", {"some": "problem"})
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message
