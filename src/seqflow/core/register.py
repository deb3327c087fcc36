# src/seqflow/core/register.py
"""
Registro da última run (conveniência de depuração).

`RunRegister` é um handle **pertencente ao chamador**: o Engine só o
atualiza quando ele é passado explicitamente para `run(...)` e nunca o
consulta para decidir execução.

Limites explícitos:
    - Não é primitiva de coordenação: chamadores concorrentes que
      compartilham o mesmo registro disputam o último valor
    - Código de produção deve usar o valor retornado por `run`
    - Não persiste nada
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from seqflow.core.pipeline.types import Pipeline


@dataclass
class RunRegister:
    _last: Optional[Pipeline] = field(default=None, repr=False)

    def record(self, pipeline: Pipeline) -> None:
        self._last = pipeline

    def last(self) -> Optional[Pipeline]:
        """Último Pipeline finalizado registrado, ou None."""
        return self._last

    def clear(self) -> None:
        self._last = None
