# src/seqflow/core/traceability/run_log.py
"""
Event Log de execução do seqflow.

Este módulo define o `RunLog`, a estrutura canônica de registro
estruturado de uma run. O seqflow registra eventos de execução como
dados explícitos (e não via handlers de logging), para que possam ser
inspecionados, serializados e comparados em testes.

Eventos emitidos pelo Engine (quando um RunLog é passado para `run`):
    - run_started   → payload: {"steps": n}
    - step_started  → step_name, payload: {"seq_id", "kind"}
    - step_finished → step_name, payload: {"elapsed_ms"}
    - step_failed   → step_name, payload: {"reason", "message", "elapsed_ms"}
    - run_finished  → payload: {"state", "elapsed_ms"}

Decisões arquiteturais:
    - O RunLog não emite eventos implicitamente
    - A ordem do log reflete a ordem de chamada das funções
    - Timestamps são normalizados para UTC timezone-aware em ISO 8601
    - O payload é livre de validação semântica

Invariantes:
    - `events` é sempre uma lista ordenada
    - Cada evento possui `event_type` e `timestamp`
    - A estrutura completa é serializável via `to_dict`

Limites explícitos:
    - Não executa pipeline
    - Não persiste o log em disco
    - Não decide políticas de execução
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """
    Normaliza um timestamp para timezone-aware em UTC.

    Timestamps timezone-naive são assumidos como UTC; timestamps com
    timezone são convertidos.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RunLog:
    """
    Registro estruturado e ordenado dos eventos de uma run.

    Campos:
        - run_id: identificador livre da execução
        - started_at: timestamp ISO 8601 (UTC) de criação do log
        - events: lista ordenada de eventos
    """

    run_id: str
    started_at: str
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Cópia serializável e independente do estado interno."""
        return {
            "run_id": self.run_id,
            "started_at": self.started_at,
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunLog":
        return cls(
            run_id=str(data.get("run_id", "")),
            started_at=str(data.get("started_at", "")),
            events=[dict(e) for e in (data.get("events", []) or [])],
        )

    def of_type(self, event_type: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e.get("event_type") == event_type]


def create_run_log(*, run_id: str, started_at: Optional[datetime] = None) -> RunLog:
    """Cria um RunLog vazio; nenhum evento é emitido na criação."""
    return RunLog(run_id=run_id, started_at=_iso(started_at or _now()), events=[])


def add_event(
    log: RunLog,
    *,
    event_type: str,
    ts: Optional[datetime] = None,
    step_name: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Adiciona um evento explícito ao log.

    Cada chamada adiciona exatamente um evento; eventos não são
    reordenados nem deduplicados.
    """
    ev: Dict[str, Any] = {"event_type": event_type, "timestamp": _iso(ts or _now())}
    if step_name is not None:
        ev["step_name"] = step_name
    if payload is not None:
        ev["payload"] = payload
    log.events.append(ev)


def run_started(log: RunLog, *, steps: int, ts: Optional[datetime] = None) -> None:
    add_event(log, event_type="run_started", ts=ts, payload={"steps": steps})


def step_started(
    log: RunLog,
    *,
    step_name: str,
    seq_id: Optional[int],
    kind: str,
    ts: Optional[datetime] = None,
) -> None:
    add_event(
        log,
        event_type="step_started",
        ts=ts,
        step_name=step_name,
        payload={"seq_id": seq_id, "kind": kind},
    )


def step_finished(
    log: RunLog,
    *,
    step_name: str,
    elapsed_ms: Optional[float],
    ts: Optional[datetime] = None,
) -> None:
    add_event(log, event_type="step_finished", ts=ts, step_name=step_name, payload={"elapsed_ms": elapsed_ms})


def step_failed(
    log: RunLog,
    *,
    step_name: str,
    reason: str,
    message: Any,
    elapsed_ms: Optional[float],
    ts: Optional[datetime] = None,
) -> None:
    """
    Registra a falha de um Step.

    A mensagem é convertida para texto: diagnósticos de validação podem
    ser estruturas arbitrárias e o log deve permanecer serializável.
    """
    add_event(
        log,
        event_type="step_failed",
        ts=ts,
        step_name=step_name,
        payload={"reason": reason, "message": str(message), "elapsed_ms": elapsed_ms},
    )


def run_finished(log: RunLog, *, state: str, elapsed_ms: float, ts: Optional[datetime] = None) -> None:
    add_event(log, event_type="run_finished", ts=ts, payload={"state": state, "elapsed_ms": elapsed_ms})
