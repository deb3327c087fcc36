# src/seqflow/core/config/loader.py
"""
Loader de configuração de execução do seqflow.

A configuração é resolvida a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional, ignorado se não existir)

A seção `engine` da configuração efetiva é convertida em `RunOptions`:

    engine:
      allow_async_args: false
      binding_precedence: step-bindings   # ou "args"

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Erros estruturais são fatais
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Schemas nomeados não são carregados de arquivo: o `SchemaRegistry`
      é sempre informado pelo código chamador
    - Não executa pipeline
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # PyYAML

from seqflow.core.engine.options import RunOptions

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo YAML/JSON e valida que a raiz é um dicionário.

    Arquivos vazios são interpretados como `{}`.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva.

    O override local é aplicado via `deep_merge` somente quando o arquivo
    existe; os defaults nunca são mutados.

    Returns:
        Dict[str, Any]: Configuração final resolvida.
    """
    effective = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective


def run_options_from_config(config: Dict[str, Any]) -> RunOptions:
    """Converte a seção `engine` (opcional) de uma configuração resolvida em RunOptions."""
    engine_cfg = config.get("engine") or {}
    if not isinstance(engine_cfg, dict):
        raise InvalidConfigRootTypeError(
            f"Seção 'engine' deve ser dict, recebido: {type(engine_cfg).__name__}"
        )
    return RunOptions.from_mapping(engine_cfg)


def load_run_options(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> RunOptions:
    """Atalho: `load_config` seguido de `run_options_from_config`."""
    return run_options_from_config(load_config(defaults_path=defaults_path, local_path=local_path))
