# src/seqflow/core/config/__init__.py
"""
Camada de configuração do seqflow.

Carrega arquivos YAML/JSON de configuração de execução (defaults +
overrides locais), resolve a configuração efetiva via deep-merge e a
converte em `RunOptions`.

Limites explícitos:
    - Não define Steps nem Pipelines
    - Não executa pipeline
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .loader import load_config, load_run_options, run_options_from_config
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "deep_merge",
    "load_config",
    "load_run_options",
    "run_options_from_config",
]
