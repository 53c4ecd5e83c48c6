# src/dataflows/core/pipeline/context.py
"""
Contexto de execução de uma run do dataflows.

Este módulo define o `RunContext`, a estrutura canônica que identifica
uma run e atua como sink de logging estruturado para o Engine e para
os engine steps.

Toda transição de ciclo de vida do Engine e todo status retornado por
um step produzem um evento neste contexto, sempre marcado com o
`run_id` da run proprietária.

Princípios fundamentais:
    - Isolamento por execução (cada run possui seu próprio contexto)
    - Logs são eventos estruturados, não texto livre
    - Formato e destino finais são responsabilidade do consumidor de `events`

Invariantes:
    - Todo evento inclui `run_id`, `step_id`, `level`, `message` e `timestamp`
    - `step_id` é None para eventos do próprio Engine
    - A coleção de eventos cresce de forma incremental (append-only)

Limites explícitos:
    - Não executa Steps
    - Não decide políticas de execução
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4


@dataclass
class RunContext:
    """
    Contexto de uma run: identidade, configuração resolvida e log de eventos.

    Campos canônicos:
    - run_id: identificador único da execução
    - created_at: timestamp UTC de criação do contexto
    - config: configuração efetiva (defaults + local deep-merge)
    - meta: metadados livres da execução (ex.: origem do gatilho)
    - events: log estruturado de eventos
    """
    run_id: str
    created_at: datetime
    config: Dict[str, Any]
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)

    @classmethod
    def create(
        cls,
        *,
        config: Optional[Dict[str, Any]] = None,
        meta: Optional[Dict[str, Any]] = None,
    ) -> "RunContext":
        return cls(
            run_id=uuid4().hex,
            created_at=datetime.now(timezone.utc),
            config=dict(config or {}),
            meta=dict(meta or {}),
        )

    def log(self, *, step_id: Optional[str], level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def messages(self, *, step_id: Optional[str] = None) -> List[str]:
        """Mensagens registradas para um step (ou para o Engine, com None)."""
        return [e["message"] for e in self.events if e["step_id"] == step_id]
