# src/seqflow/core/pipeline/__init__.py
"""
# Pipeline Core — seqflow

Este pacote define o **modelo de dados** e a **composição** de pipelines.

Um pipeline é uma **sequência ordenada de Steps**, onde:
- cada Step declara nome, função, paths de entrada e path de saída
- a execução é coordenada exclusivamente pelo Engine
- o estado compartilhado é um mapa copy-on-write endereçado por paths

## Componentes

- **types**
  - `StepKind`, `StepState`, `FailureReason`
  - `Step`, `Pipeline`: valores imutáveis

- **step**
  - `action`, `transformation`: construtores com contrato posicional
  - `validate_step`: validação estrutural

- **builder**
  - `make`: achatamento, indexação e merge de bindings
  - `StepRegistry`: ordem de registro e unicidade de nomes

## Invariantes

- `seq_id` único e contíguo 0..n-1
- nomes de Step únicos no Pipeline
- templates nunca são mutados por uma run
"""

from .builder import StepRegistry, make, validate_pipeline
from .step import action, transformation, validate_step
from .types import FailureReason, Pipeline, Step, StepKind, StepState

__all__ = [
    "FailureReason",
    "Pipeline",
    "Step",
    "StepKind",
    "StepRegistry",
    "StepState",
    "action",
    "make",
    "transformation",
    "validate_pipeline",
    "validate_step",
]
