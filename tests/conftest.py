"""
Fixtures compartilhados para testes do seqflow.

Este módulo define fixtures reutilizáveis que fornecem:
- funções de domínio determinísticas (saldo por moeda e câmbio)
- Steps e Pipeline de exemplo construídos com a API pública
- args canônicos de uma run de exemplo
- executor de threads para testes de valores diferidos

As funções de domínio são stubs sem I/O: representam colaboradores
externos opacos (banco de dados, HTTP) do ponto de vista do Engine.

Invariantes:
    - Nenhuma fixture realiza I/O de rede ou banco
    - Dados retornados são determinísticos e isolados por teste
    - O executor é sempre encerrado ao final do teste

Limites explícitos:
    - Não substituem testes de integração com colaboradores reais
    - Não contêm lógica condicional complexa
"""

import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from seqflow import action, make, transformation


# =====================================================
# Funções de domínio (colaboradores opacos)
# =====================================================

def db_execute(data_source, sql_statement, user_id):
    if sql_statement == "select * from balance where user_id = ?" and user_id == 2:
        return [
            {"balance": 10000.0, "currency": "SEK", "id": 2, "user_id": 2},
            {"balance": 1000.0, "currency": "USD", "id": 3, "user_id": 2},
        ]
    return []


def get_exchange_rates(base_url, date, base, symbols):
    return {
        "body": {
            "base": "EUR",
            "date": "2020-06-01",
            "rates": {"SEK": 10.4635, "USD": 1.1116},
        }
    }


def extract_currencies(balances):
    return [b["currency"] for b in balances]


def calculate_value(balances, exchange_rates):
    return sum(b["balance"] / exchange_rates[b["currency"]] for b in balances)


EXPECTED_VALUE = 1855.3073327623074


# =====================================================
# Steps e Pipeline de exemplo
# =====================================================

@pytest.fixture
def currency_args() -> dict:
    """Args canônicos da run de exemplo (usuário 2, base EUR)."""
    return {
        "date_today": "2020-06-01",
        "data_source": "fake data source",
        "sql_query": "select * from balance where user_id = ?",
        "user_id": 2,
        "exchange_rate_url": "https://api.exchangeratesapi.io",
        "base_currency": "EUR",
    }


@pytest.fixture
def currency_steps() -> dict:
    """
    Steps do exemplo de valor de conta em múltiplas moedas.

    Os paths de entrada misturam chaves simples e paths aninhados para
    exercitar a normalização de paths.
    """
    return {
        "get_balances": action(
            "get-balances-for-user", db_execute, ["data_source", "sql_query", "user_id"], "balances"
        ),
        "extract_currencies": transformation(
            "extract-currencies", extract_currencies, [["balances"]], ["currencies", "value"]
        ),
        "get_exchange_rates": action(
            "get-exchange-rates",
            get_exchange_rates,
            [["exchange_rate_url"], ["date_today"], ["base_currency"], ["currencies", "value"]],
            "exchange_rates_response",
        ),
        "calculate_value": transformation(
            "calculate-value",
            calculate_value,
            ["balances", ["exchange_rates_response", "body", "rates"]],
            "value",
            float,
        ),
    }


@pytest.fixture
def currency_pipeline(currency_steps):
    return make(
        {},
        currency_steps["get_balances"],
        currency_steps["extract_currencies"],
        currency_steps["get_exchange_rates"],
        currency_steps["calculate_value"],
    )


@pytest.fixture
def expected_value() -> float:
    return EXPECTED_VALUE


# =====================================================
# Valores diferidos
# =====================================================

@pytest.fixture
def executor():
    """Executor de threads encerrado ao final do teste."""
    pool = ThreadPoolExecutor(max_workers=2)
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def slow_exchange_rates(executor):
    """Versão assíncrona de `get_exchange_rates`: retorna um Future."""

    def _get_exchange_rates_async(base_url, date, base, symbols):
        def _work():
            time.sleep(0.05)
            return get_exchange_rates(base_url, date, base, symbols)

        return executor.submit(_work)

    return _get_exchange_rates_async
