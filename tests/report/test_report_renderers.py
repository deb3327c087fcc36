"""
Testes dos renderizadores de runs.

Os testes asseguram que:
- a tabela textual e a HTML contêm uma linha por Step
- valores longos são encurtados
- a chamada do Step que falhou é renderizada com os argumentos resolvidos
- o HTML escapa conteúdo
"""

import pytest

from seqflow import RunRegister, make, run, transformation
from seqflow.report import (
    DEFAULT_COLUMNS,
    render_call,
    render_failed_call,
    render_last_run,
    render_run,
    run_rows,
    short_str,
)


def divide(a, b):
    return a / b


def test_short_str():
    assert short_str("abc") == "abc"
    assert short_str("x" * 40) == "x" * 35 + "..."
    assert short_str([1, 2], length=3) == "[1,..."


def test_run_rows_for_successful_run(currency_pipeline, currency_args):
    finished = run(currency_pipeline, currency_args)
    rows = run_rows(finished)

    assert len(rows) == 4
    assert list(rows[0]) == list(DEFAULT_COLUMNS)
    assert rows[0]["state"] == "successful"
    assert rows[0]["function"] == "db_execute"
    assert rows[1]["result"] == "['SEK', 'USD']"


def test_run_rows_for_template(currency_pipeline):
    rows = run_rows(currency_pipeline, ["seq_id", "name", "state", "elapsed_ms"])

    assert [r["seq_id"] for r in rows] == ["0", "1", "2", "3"]
    assert {r["state"] for r in rows} == {"not-started"}
    assert {r["elapsed_ms"] for r in rows} == {"None"}


def test_unknown_column_raises(currency_pipeline):
    with pytest.raises(KeyError):
        run_rows(currency_pipeline, ["seq_id", "colour"])


def test_render_run_text_and_html():
    p = make(
        {},
        transformation("ok", lambda: "<b>", [], "a"),
        transformation("div", divide, ["a", "zero"], "b"),
    )
    finished = run(p, {"zero": 0})

    rendered = render_run(finished, ["seq_id", "name", "state", "failure_reason", "result"])

    lines = rendered.text.splitlines()
    assert len(lines) == 4
    assert lines[0].startswith("| seq_id")
    assert "exception" in lines[3]
    assert rendered.html.startswith("<h4>run: failed</h4>")
    assert "&lt;b&gt;" in rendered.html
    assert "<b>" not in rendered.html


def test_render_failed_call():
    p = make({}, transformation("div", divide, ["a", "b"], "q"))

    assert render_failed_call(run(p, {"a": 1, "b": 0})) == "divide(1, 0)"
    assert render_failed_call(run(p, {"a": 4, "b": 2})) is None


def test_render_call_for_not_started_step():
    s = transformation("div", divide, ["a", "b"], "q")
    assert render_call(s) == "divide()"


def test_render_last_run():
    register = RunRegister()
    assert render_last_run(register) is None

    run(make({}, transformation("div", divide, ["a", "b"], "q")), {"a": 4, "b": 2}, register=register)
    rendered = render_last_run(register)

    assert "successful" in rendered.text
    assert "2.0" in rendered.text
