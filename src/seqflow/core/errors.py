# src/seqflow/core/errors.py
"""
seqflow — Erros canônicos de contrato (construção e introspecção).

Este módulo define a hierarquia de exceções que representam **violações
de contrato do programador**, e não falhas de dados durante a execução.

Duas categorias são mantidas estritamente separadas:
    - erros de construção: Step ou Pipeline malformado, nomes duplicados,
      paths vazios, opções de run inválidas. São levantados imediatamente
      no build (`make`, `action`) ou na entrada de `run`.
    - erros de introspecção: consulta de campo indisponível para o estado
      atual (ex.: `result` de um Step que não teve sucesso).

Falhas de dados (`invalid-output`, `exception`) **nunca** são representadas
aqui: elas ficam registradas no trace do Step e do Pipeline.

Invariantes:
    - Todo erro de construção herda de `PipelineDefinitionError`
    - Mensagens identificam o item ofensor
    - Nenhum erro deste módulo é capturado pelo Engine
"""


class PipelineDefinitionError(ValueError):
    """
    Exceção base para violações estruturais de Step ou Pipeline.

    Levantada no momento da construção ou na entrada de `run`, antes que
    qualquer Step seja executado. Nunca aparece no trace de uma run.
    """


class StepDefinitionError(PipelineDefinitionError):
    """Step com campos ausentes, de tipo inválido ou aridade incompatível."""


class DuplicateStepNameError(PipelineDefinitionError):
    """
    Dois ou mais Steps do mesmo Pipeline compartilham o mesmo nome.

    O nome do Step é a chave de identidade usada na introspecção; a
    duplicidade é tratada como erro fatal de construção, sem renomeação
    automática.
    """


class InvalidPathError(PipelineDefinitionError):
    """Path vazio ou de formato não suportado."""


class UnknownSchemaError(PipelineDefinitionError):
    """`SchemaRef` que não pode ser resolvido no `SchemaRegistry` da run."""


class RunOptionsError(PipelineDefinitionError):
    """Opções de run desconhecidas ou de tipo inválido."""


class NotSuccessfulError(ValueError):
    """Consulta de resultado sobre um Step ou Pipeline que não teve sucesso."""


class NotFailedError(ValueError):
    """Consulta de campos de falha sobre um Step que não falhou."""


class StepNotFoundError(LookupError):
    """Nenhum Step corresponde ao nome ou índice informado."""
