# tests/core/pipeline/test_registry.py
"""
Testes do StepTypeRegistry.

Os testes asseguram que:
- cada tag é registrada uma única vez
- objetos que não satisfazem o contrato StepType são rejeitados
- tipos desconhecidos falham na validação do dataflow, antes da run
- a ordem de registro é preservada

Limites explícitos:
    - Não valida a construção de engine steps (ver testes do Engine)
"""

import pytest

try:
    from dataflows.core.pipeline.definition import Dataflow, StepDefinition
    from dataflows.core.pipeline.registry import (
        DuplicateStepTypeError,
        StepTypeRegistry,
        UnknownStepTypeError,
    )
    from dataflows.core.pipeline.step import StepType
    from dataflows.steps.base import ConnectorStepType, FlowStepType
except Exception as e:  # noqa: BLE001
    StepTypeRegistry = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing registry modules. Import error: {_IMPORT_ERR}")


def test_register_and_get():
    _require_imports()
    reg = StepTypeRegistry()
    flow = FlowStepType()
    reg.register("flow", flow)
    reg.register("connector", ConnectorStepType())

    assert reg.get("flow") is flow
    assert "flow" in reg
    assert "missing" not in reg
    assert reg.tags() == ["flow", "connector"]
    assert reg.get("flow").is_flow is True
    assert reg.get("connector").is_flow is False


def test_registry_rejects_duplicate_tag():
    """
    Verifica que uma mesma tag não pode ser registrada duas vezes.

    Invariantes:
        - A primeira fábrica registrada permanece ativa
    """
    _require_imports()
    reg = StepTypeRegistry()
    first = ConnectorStepType()
    reg.register("mark", first)

    with pytest.raises(DuplicateStepTypeError):
        reg.register("mark", ConnectorStepType())

    assert reg.get("mark") is first


@pytest.mark.parametrize("tag", ["", "   ", None])
def test_registry_rejects_empty_tag(tag):
    _require_imports()
    with pytest.raises(ValueError):
        StepTypeRegistry().register(tag, ConnectorStepType())


def test_registry_rejects_non_step_type():
    _require_imports()
    with pytest.raises(TypeError):
        StepTypeRegistry().register("bad", object())


def test_step_types_satisfy_protocol():
    _require_imports()
    assert isinstance(ConnectorStepType(), StepType)
    assert isinstance(FlowStepType(), StepType)


def test_unknown_type_lookup_and_validation():
    _require_imports()
    reg = StepTypeRegistry()
    reg.register("connector", ConnectorStepType())
    dataflow = Dataflow(name="df", steps=[
        StepDefinition(id="a", type="connector"),
        StepDefinition(id="b", type="writer", depends_on=["a"]),
    ])

    with pytest.raises(UnknownStepTypeError, match="writer"):
        reg.validate(dataflow)
    with pytest.raises(UnknownStepTypeError, match="registered: connector"):
        reg.get("writer")


def test_unknown_type_on_empty_registry():
    _require_imports()
    reg = StepTypeRegistry()

    with pytest.raises(UnknownStepTypeError) as exc_info:
        reg.get("reader")
    assert str(exc_info.value) == "Unknown step type: reader"
