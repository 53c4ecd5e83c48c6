# tests/core/pipeline/test_run_context_logging.py
"""
Testes de logging estruturado do RunContext.

Este módulo valida a capacidade do RunContext de registrar eventos de
log estruturados, marcados com o `run_id` da run proprietária.

Os testes asseguram que:
- eventos de log são registrados de forma estruturada
- campos extras são preservados
- mensagens podem ser filtradas por step (ou pelo Engine, com None)
- cada contexto criado possui identidade própria

Invariantes:
    - Todo evento contém run_id, step_id, level, message e timestamp
    - A coleção de eventos é append-only

Limites explícitos:
    - Não valida persistência dos eventos
    - Não valida formatação final de logs
"""

from datetime import datetime

import pytest

try:
    from dataflows.core.pipeline.context import RunContext
except Exception as e:  # noqa: BLE001
    RunContext = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing RunContext (src/dataflows/core/pipeline/context.py). "
            f"Import error: {_IMPORT_ERR}"
        )


def test_structured_log_event(dummy_ctx):
    """
    Verifica que o RunContext registra eventos de log estruturados.

    Decisões arquiteturais:
        - Logs são tratados como eventos estruturados, não como texto livre
        - Cada evento de log inclui `run_id` e `step_id` explicitamente
        - Campos extras são aceitos e preservados sem filtragem implícita

    Limites explícitos:
        - Não valida política de níveis de log
    """
    _require_imports()
    dummy_ctx.log(step_id="reader", level="info", message="hello", foo=1)

    ev = dummy_ctx.events[-1]
    assert ev["run_id"] == "run-test-001"
    assert ev["step_id"] == "reader"
    assert ev["level"] == "info"
    assert ev["message"] == "hello"
    assert ev["foo"] == 1
    assert datetime.fromisoformat(ev["timestamp"]).tzinfo is not None


def test_messages_filtered_by_step(dummy_ctx):
    _require_imports()
    dummy_ctx.log(step_id=None, level="info", message="Created")
    dummy_ctx.log(step_id="a", level="info", message="status blocked")
    dummy_ctx.log(step_id="b", level="info", message="status finished")
    dummy_ctx.log(step_id="a", level="info", message="status finished")

    assert dummy_ctx.messages() == ["Created"]
    assert dummy_ctx.messages(step_id="a") == ["status blocked", "status finished"]


def test_create_assigns_fresh_identity():
    _require_imports()
    cfg = {"globals": {"path": None}}

    first = RunContext.create(config=cfg, meta={"trigger": "manual"})
    second = RunContext.create(config=cfg)

    assert first.run_id != second.run_id
    assert first.meta == {"trigger": "manual"}
    assert first.events == []
    assert first.config is not cfg
