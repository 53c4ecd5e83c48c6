# tests/errors/test_error_payloads.py
"""
Testes dos payloads canônicos de erro e das exceções tipadas.

Os testes asseguram que:
- fábricas de payload produzem códigos estáveis e details estruturados
- payloads são serializáveis (to_dict → JSON)
- exceções tipadas carregam message/details/hint e são hierárquicas
"""

import json

from dataflows.core import errors
from dataflows.core.exceptions import (
    BadEngineStatusError,
    DataflowException,
    EngineContractViolation,
    UnexpectedStepStatusError,
)


def test_bad_status_payload():
    payload = errors.engine_bad_status(status="finished", allowed=["initialised", "processing"])

    assert payload.type == errors.ENGINE_BAD_STATUS
    assert payload.details == {"status": "finished", "allowed": ["initialised", "processing"]}
    assert payload.hint


def test_unexpected_step_status_payload_is_json_serialisable():
    payload = errors.engine_unexpected_step_status(step="a", returned=object())

    data = json.loads(json.dumps(payload.to_dict()))

    assert data["type"] == "ENGINE_UNEXPECTED_STEP_STATUS"
    assert data["details"]["step"] == "a"
    assert data["details"]["returned"].startswith("<object object")


def test_step_aborted_and_execution_error_payloads():
    aborted = errors.step_aborted(step="x", exc_type="RuntimeError", exc_message="boom")
    failed = errors.engine_execution_error(exc_type="OSError", exc_message="disk")

    assert aborted.type == errors.STEP_ABORTED
    assert aborted.details == {"step": "x", "exc_type": "RuntimeError", "exc_message": "boom"}
    assert failed.type == errors.ENGINE_EXECUTION_ERROR
    assert failed.details["step"] is None


def test_typed_exceptions_hierarchy_and_str():
    exc = UnexpectedStepStatusError(message="Step retornou status fora do contrato", details={"step": "a"})

    assert isinstance(exc, EngineContractViolation)
    assert isinstance(exc, DataflowException)
    assert str(exc) == "Step retornou status fora do contrato"
    assert exc.details == {"step": "a"}
    assert exc.hint is None
    assert not isinstance(exc, BadEngineStatusError)


def test_typed_exceptions_carry_catalog_codes():
    from dataflows.core.exceptions import EngineConfigurationError, EngineExecutionError

    assert BadEngineStatusError.code == errors.ENGINE_BAD_STATUS
    assert UnexpectedStepStatusError.code == errors.ENGINE_UNEXPECTED_STEP_STATUS
    assert EngineExecutionError.code == errors.ENGINE_EXECUTION_ERROR
    assert EngineConfigurationError.code is None
    # code é atributo de classe, não campo do dataclass
    assert "code" not in UnexpectedStepStatusError(message="x").__dict__
