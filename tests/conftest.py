"""
Fixtures compartilhados para testes do dataflows.

Este módulo define fixtures reutilizáveis que fornecem:
- configuração mínima e determinística
- contexto de execução controlado (RunContext)
- registry de tipos com steps roteirizados e steps de registros
- um construtor de Engine com defaults seguros para testes

Decisões arquiteturais:
    - Steps roteirizados isolam o escalonador da lógica dos steps
    - O store de variáveis globais opera em memória por padrão
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa uma run
    - Nenhuma fixture realiza I/O
"""

import pytest
from datetime import datetime, timezone


@pytest.fixture
def dummy_config() -> dict:
    """
    Configuração mínima já resolvida (sem loader).

    Returns:
        dict: Configuração sem path de variáveis globais (store em memória).
    """
    return {
        "globals": {"path": None},
    }


@pytest.fixture
def dummy_ctx(dummy_config):
    """
    RunContext determinístico e isolado para testes.

    Returns:
        RunContext: Contexto com run_id e created_at fixos.
    """
    from dataflows.core.pipeline.context import RunContext

    return RunContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config=dummy_config,
        meta={"source": "pytest"},
    )


@pytest.fixture
def calls() -> list:
    """Registro compartilhado de chamadas de ciclo de vida (ordem global)."""
    return []


@pytest.fixture
def registry(calls):
    """
    Registry com os tipos usados pelos testes.

    Tipos registrados:
        - connector / flow: steps roteirizados (ScriptedType)
        - reader / upper / collect: flows de registros
        - mark / explode: connectors de registros
    """
    from dataflows.core.pipeline.registry import StepTypeRegistry
    from tests.fixtures.steps import records
    from tests.fixtures.steps.scripted import ScriptedType

    reg = StepTypeRegistry()
    reg.register("connector", ScriptedType(is_flow=False, calls=calls))
    reg.register("flow", ScriptedType(is_flow=True, calls=calls))
    reg.register("reader", records.ListReaderType())
    reg.register("upper", records.UpperType())
    reg.register("collect", records.CollectType())
    reg.register("mark", records.MarkType())
    reg.register("explode", records.ExplodeType())
    return reg


@pytest.fixture
def make_engine(dummy_ctx, registry):
    """
    Fábrica de Engine para testes.

    Aceita scripts por step id (`scripts={"C": [EngineStatus.WAITING]}`),
    aplicados aos tipos roteirizados antes da construção.
    """
    from dataflows.core.engine.engine import Engine
    from dataflows.core.pipeline.definition import Dataflow

    def _make(steps, *, scripts=None, enabled=True, isdryrun=False, automated=True, **kwargs):
        for tag in ("connector", "flow"):
            registry.get(tag).scripts = dict(scripts or {})
        dataflow = kwargs.pop("dataflow", None) or Dataflow(name="test dataflow", steps=steps, enabled=enabled)
        return Engine(
            dataflow,
            ctx=dummy_ctx,
            registry=registry,
            isdryrun=isdryrun,
            automated=automated,
            **kwargs,
        )

    return _make
