# src/seqflow/core/config/errors.py
"""
Exceções canônicas da camada de configuração do seqflow.

As exceções aqui definidas representam falhas estruturais durante o
carregamento e a resolução da configuração de execução, e não falhas de
Steps.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa falha de dados de uma run
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração do seqflow.

    Permite captura genérica de falhas de configuração, separando-as das
    falhas registradas no trace de uma run.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de configuração base (defaults) não encontrado.

    O arquivo de defaults é obrigatório; não há criação implícita.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado pelo loader.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz da configuração não é um mapa (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo:
        - base:     {"engine": {"allow_async_args": false}}
        - override: {"engine": "async"}

    Nenhum merge parcial é produzido.
    """
