# src/seqflow/core/engine/__init__.py
"""
Engine do seqflow.

Este pacote contém a execução sequencial de pipelines:

    - engine  → `run` (loop da run) e `run_step` (máquina de estados do Step)
    - options → `RunOptions` e `BindingPrecedence`

Princípios fundamentais:
    - Steps executam estritamente um após o outro, na thread do chamador
    - A primeira falha interrompe a run
    - Falhas de dados ficam no trace; apenas violações de contrato são levantadas
"""

from .engine import run, run_step
from .options import BindingPrecedence, RunOptions, coerce_options

__all__ = ["BindingPrecedence", "RunOptions", "coerce_options", "run", "run_step"]
