# src/seqflow/report/renderers.py
"""
Renderização de runs para leitura humana (v1)

Objetivo:
- Renderizar Pipelines finalizados como tabela (texto e HTML).
- Renderizar a chamada de um Step como ela seria escrita em Python,
  para colar em um REPL e depurar.
- NÃO altera Pipelines nem Steps.
- NÃO influencia a execução: o Engine não conhece este módulo.

Saídas:
- texto (sempre preenchido)
- HTML (string) para notebooks
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from seqflow.core.introspection import failed_step
from seqflow.core.pipeline.types import Pipeline, Step
from seqflow.core.register import RunRegister

DEFAULT_COLUMNS = ("seq_id", "state", "name", "function", "args", "result")
SHORT_LEN = 35


@dataclass(frozen=True)
class RenderResult:
    """Resultado de renderização (apenas apresentação)."""
    html: Optional[str]
    text: str


def _escape(s: Any) -> str:
    return html.escape("" if s is None else str(s))


def short_str(value: Any, length: int = SHORT_LEN) -> str:
    s = str(value)
    if len(s) < length:
        return s
    return f"{s[:length]}..."


def function_name(fn: Any) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)


def render_call(step: Step) -> str:
    """
    Renderiza a chamada do Step com os argumentos resolvidos.

    Exemplo: `calculate_value([{'balance': 10.0}], {'SEK': 10.46})`
    """
    call_args = ", ".join(repr(a) for a in (step.args or ()))
    return f"{function_name(step.function)}({call_args})"


def render_failed_call(pipeline: Pipeline) -> Optional[str]:
    """Chamada do Step que falhou, ou None se nenhum falhou."""
    failed = failed_step(pipeline)
    if failed is None:
        return None
    return render_call(failed)


def _step_row(step: Step) -> Dict[str, Any]:
    return {
        "seq_id": step.seq_id,
        "state": step.state.value,
        "name": step.name,
        "kind": step.kind.value,
        "function": function_name(step.function),
        "args": step.args,
        "result": step.result,
        "failure_reason": step.failure_reason.value if step.failure_reason else None,
        "failure_message": step.failure_message,
        "elapsed_ms": None if step.elapsed_ms is None else round(step.elapsed_ms, 3),
    }


def run_rows(pipeline: Pipeline, columns: Sequence[str] = DEFAULT_COLUMNS) -> List[Dict[str, str]]:
    """Linhas da tabela de run, com valores encurtados."""
    rows = []
    for s in pipeline.steps:
        full = _step_row(s)
        unknown = [c for c in columns if c not in full]
        if unknown:
            raise KeyError(f"Unknown column(s): {', '.join(unknown)}")
        rows.append({c: short_str(full[c]) for c in columns})
    return rows


def render_text_table(rows: Sequence[Mapping[str, str]], columns: Sequence[str]) -> str:
    widths = {c: max([len(c)] + [len(r[c]) for r in rows]) for c in columns}

    def line(values: Mapping[str, str]) -> str:
        return "| " + " | ".join(values[c].ljust(widths[c]) for c in columns) + " |"

    header = line({c: c for c in columns})
    sep = "|-" + "-+-".join("-" * widths[c] for c in columns) + "-|"
    return "\n".join([header, sep] + [line(r) for r in rows])


def render_table_html(rows: Sequence[Mapping[str, str]], columns: Sequence[str], title: Optional[str] = None) -> str:
    heading = f"<h4>{_escape(title)}</h4>" if title else ""

    if not rows:
        return f"{heading}<div><em>(empty)</em></div>"

    th = "".join(f"<th>{_escape(c)}</th>" for c in columns)
    trs = []
    for row in rows:
        tds = "".join(f"<td>{_escape(row.get(c))}</td>" for c in columns)
        trs.append(f"<tr>{tds}</tr>")

    return (
        f"{heading}"
        "<table>"
        f"<thead><tr>{th}</tr></thead>"
        "<tbody>" + "".join(trs) + "</tbody>"
        "</table>"
    )


def render_run(pipeline: Pipeline, columns: Sequence[str] = DEFAULT_COLUMNS) -> RenderResult:
    """
    Renderiza a run como tabela, um Step por linha.

    Colunas disponíveis: seq_id, state, name, kind, function, args, result,
    failure_reason, failure_message, elapsed_ms.
    """
    rows = run_rows(pipeline, columns)
    title = f"run: {pipeline.state.value}"
    return RenderResult(
        html=render_table_html(rows, columns, title=title),
        text=render_text_table(rows, columns),
    )


def render_last_run(register: RunRegister, columns: Sequence[str] = DEFAULT_COLUMNS) -> Optional[RenderResult]:
    last = register.last()
    if last is None:
        return None
    return render_run(last, columns)
