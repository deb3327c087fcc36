# src/seqflow/report/__init__.py
from .renderers import (
    DEFAULT_COLUMNS,
    RenderResult,
    render_call,
    render_failed_call,
    render_last_run,
    render_run,
    render_table_html,
    render_text_table,
    run_rows,
    short_str,
)

__all__ = [
    "DEFAULT_COLUMNS",
    "RenderResult",
    "render_call",
    "render_failed_call",
    "render_last_run",
    "render_run",
    "render_table_html",
    "render_text_table",
    "run_rows",
    "short_str",
]
