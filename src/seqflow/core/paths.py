# src/seqflow/core/paths.py
"""
Resolução de paths sobre o estado compartilhado da run.

Este módulo implementa o **Path Resolver**: leitura e escrita de valores
em estado aninhado (mapas e sequências) a partir de uma sequência ordenada
de chaves/índices.

Um path pode ser declarado como:
    - uma chave simples (`"balances"`), equivalente a `("balances",)`
    - uma lista ou tupla de chaves/índices (`["rates", "body", 0]`)

Princípios fundamentais:
    - Escrita é sempre copy-on-write: o estado do chamador nunca é mutado
    - Leitura de caminho inexistente retorna `None` (ausente), sem erro
    - Valores diferidos (`concurrent.futures.Future`) só são aguardados
      quando solicitado explicitamente

Invariantes:
    - `get_in(set_in(state, path, v), path) == v` para todo path
      não vazio aceito por `set_in` (mapas, listas e tuplas, inclusive
      índices negativos)
    - `set_in` copia cada container ao longo do path e nada além dele

Limites explícitos:
    - A espera por valores diferidos é bloqueante e ilimitada: não há
      timeout nem cancelamento
    - Não valida semântica dos valores lidos ou escritos
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from concurrent.futures import Future
from typing import Any, Hashable, Tuple, Union

from .errors import InvalidPathError


Path = Union[Hashable, Sequence[Hashable]]


class PathError(IndexError):
    """Escrita em índice de lista fora do intervalo permitido."""


def normalize_path(path: Path) -> Tuple[Hashable, ...]:
    """
    Normaliza um path declarado para uma tupla de segmentos.

    Listas e tuplas são tratadas como sequência de segmentos; qualquer
    outro valor é uma chave simples. Strings nunca são tratadas como
    sequência.

    Raises:
        InvalidPathError: Se o path resultante for vazio ou `None`.
    """
    if path is None:
        raise InvalidPathError("path must not be None")

    if isinstance(path, (list, tuple)):
        segments = tuple(path)
    else:
        segments = (path,)

    if not segments:
        raise InvalidPathError("path must not be empty")

    return segments


def is_deferred(value: Any) -> bool:
    return isinstance(value, Future)


def _await(value: Any) -> Any:
    # Future.result() sem timeout: espera ilimitada na thread do Engine
    while is_deferred(value):
        value = value.result()
    return value


def _is_index(segment: Hashable) -> bool:
    return isinstance(segment, int) and not isinstance(segment, bool)


def _is_indexable(node: Any) -> bool:
    return isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray))


def _step_into(node: Any, segment: Hashable) -> Any:
    if isinstance(node, Mapping):
        return node.get(segment)

    if _is_indexable(node) and _is_index(segment):
        if -len(node) <= segment < len(node):
            return node[segment]
        return None

    return None


def get_in(state: Any, path: Path, *, await_deferred: bool = False) -> Any:
    """
    Lê o valor localizado por `path` dentro de `state`.

    A descida percorre mapas por chave e sequências por índice inteiro.
    Chave ausente, índice fora do intervalo ou nó que não é container
    resultam em `None`.

    Com `await_deferred=True`, qualquer valor diferido encontrado no
    caminho (intermediário ou terminal) é aguardado e a descida continua
    com o valor resolvido. Caso contrário, valores diferidos passam
    adiante sem resolução.

    Args:
        state: Estado aninhado (tipicamente um dict).
        path: Chave simples ou sequência de chaves/índices.
        await_deferred: Se valores diferidos devem ser aguardados.

    Returns:
        O valor encontrado, ou `None` quando ausente.
    """
    node = state
    for segment in normalize_path(path):
        if await_deferred:
            node = _await(node)
        node = _step_into(node, segment)
        if node is None:
            return None

    if await_deferred:
        node = _await(node)
    return node


def _assoc(node: Any, segment: Hashable, value: Any) -> Any:
    if _is_indexable(node) and _is_index(segment):
        copied = list(node)
        index = segment + len(copied) if segment < 0 else segment
        if 0 <= index < len(copied):
            copied[index] = value
        elif index == len(copied):
            copied.append(value)
        else:
            raise PathError(f"index {segment} out of range for sequence of length {len(node)}")
        # tuplas continuam tuplas; demais sequências viram list
        return tuple(copied) if isinstance(node, tuple) else copied

    copied = dict(node) if isinstance(node, Mapping) else {}
    copied[segment] = value
    return copied


def set_in(state: Any, path: Path, value: Any) -> Any:
    """
    Retorna um novo estado com `value` escrito em `path`.

    Política copy-on-write:
        - cada container ao longo do path é copiado (cópia rasa)
        - containers intermediários ausentes são criados como dict
        - nós que não são container são substituídos por dict
        - em sequências (list, tuple), o índice deve existir ou ser igual ao
          tamanho (append); índices negativos contam a partir do fim, como
          em `get_in`; tuplas continuam tuplas

    O objeto `state` do chamador nunca é mutado.

    Raises:
        InvalidPathError: Se o path for vazio.
        PathError: Se um índice de sequência estiver fora do intervalo.
    """
    segments = normalize_path(path)
    head, rest = segments[0], segments[1:]

    if not rest:
        return _assoc(state, head, value)

    child = _step_into(state, head)
    return _assoc(state, head, set_in(child, rest, value))
