# src/seqflow/core/__init__.py
"""
Core do seqflow.

Este pacote contém a implementação canônica do executor declarativo de
pipelines sequenciais:

    - paths        → leitura/escrita copy-on-write no estado aninhado
    - validation   → capacidade de validação plugável e schemas nomeados
    - pipeline     → modelo de dados (Step, Pipeline) e composição (make)
    - engine       → execução sequencial e taxonomia de falhas
    - introspection→ consultas puras sobre Pipelines e Steps
    - register     → handle opcional da última run
    - config       → opções de execução a partir de YAML/JSON
    - traceability → Event Log estruturado da run

Princípios fundamentais:
    - Steps executam estritamente em sequência, na thread do chamador
    - Templates são valores imutáveis; uma run produz uma nova cópia
    - Falhas de dados ficam no trace, nunca são levantadas por `run`

Limites explícitos:
    - Sem DAG, paralelismo, execução distribuída ou retry
    - Sem persistência de pipelines ou runs
"""
