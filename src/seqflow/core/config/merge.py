# src/seqflow/core/config/merge.py
"""
Deep-merge determinístico de configuração.

Usado para aplicar o arquivo local sobre os defaults antes de extrair a
seção `engine`. Não é usado para bindings de Step: bindings seguem merge
raso por chave (ver `seqflow.core.pipeline.builder`).

Erros de conflito identificam a chave pelo caminho completo com pontos
(ex.: `engine.allow_async_args`), já que a mesma chave pode aparecer em
seções diferentes.
"""

from copy import deepcopy
from typing import Any, Dict, Tuple

from .errors import ConfigTypeConflictError


def _dotted(trail: Tuple[str, ...]) -> str:
    return ".".join(str(k) for k in trail)


def _merge_value(trail: Tuple[str, ...], current: Any, value: Any) -> Any:
    if current is None or value is None:
        return deepcopy(value)

    if isinstance(current, dict) and isinstance(value, dict):
        return _merge_dicts(trail, current, value)

    # listas substituem qualquer valor; escalares só o mesmo tipo
    if isinstance(value, list) or type(current) is type(value):
        return deepcopy(value)

    raise ConfigTypeConflictError(
        f"Conflito de tipo em '{_dotted(trail)}': "
        f"{type(current).__name__} vs {type(value).__name__}"
    )


def _merge_dicts(trail: Tuple[str, ...], base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = {key: deepcopy(val) for key, val in base.items()}
    for key, value in override.items():
        if key in merged:
            merged[key] = _merge_value(trail + (key,), merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` com `override`, produzindo um novo dicionário.

    Política de merge:
        - dict + dict       → merge recursivo por chave
        - list              → sobrescrita total
        - escalar           → sobrescrita pelo override, se do mesmo tipo
        - `None` em qualquer lado → sobrescrita direta
        - demais combinações → `ConfigTypeConflictError`

    Nenhum dos inputs é mutado.

    Raises:
        ConfigTypeConflictError: Conflito de tipos em alguma chave, ou
            argumento raiz que não é dict.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return _merge_dicts((), base, override)
