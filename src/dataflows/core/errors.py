"""
Payloads de erro do dataflows.

Quando uma run termina em ABORTED, o chamador recebe, além da exceção
original, um `DataflowErrorPayload`: um registro plano e serializável
com um código estável (`type`) que pode ser gravado em log, devolvido
por uma API ou comparado em testes sem depender da classe da exceção.

Códigos (v1):
    ENGINE_BAD_STATUS              operação do Engine fora de INITIALISED/PROCESSING
    ENGINE_UNEXPECTED_STEP_STATUS  `go()` devolveu um valor fora da tabela de fila
    ENGINE_EXECUTION_ERROR         falha sem step de origem identificado
    STEP_ABORTED                   um step abortou a run
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, List


@dataclass(frozen=True)
class DataflowErrorPayload:
    """
    Registro serializável de uma falha.

    Campos:
    - type: um dos códigos do módulo
    - message: frase curta para humanos
    - details: dados estruturados (step, status, tipo da exceção...)
    - hint: onde o operador deve olhar para corrigir
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        # details deve conter apenas valores serializáveis
        return asdict(self)


ENGINE_BAD_STATUS = "ENGINE_BAD_STATUS"
ENGINE_UNEXPECTED_STEP_STATUS = "ENGINE_UNEXPECTED_STEP_STATUS"
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
STEP_ABORTED = "STEP_ABORTED"


def engine_bad_status(
    *,
    status: str,
    allowed: List[str],
    hint: str = "Chame initialise() antes de execute_step() e não continue uma run finalizada ou abortada.",
) -> DataflowErrorPayload:
    return DataflowErrorPayload(
        type=ENGINE_BAD_STATUS,
        message="Engine em estado inválido para a operação",
        details={"status": status, "allowed": allowed},
        hint=hint,
    )


def engine_unexpected_step_status(
    *,
    step: str,
    returned: Any,
    hint: str = "Ajuste o Step para retornar apenas BLOCKED, WAITING, FLOWING, FINISHED, CANCELLED ou ABORTED.",
) -> DataflowErrorPayload:
    return DataflowErrorPayload(
        type=ENGINE_UNEXPECTED_STEP_STATUS,
        message="Step retornou status fora do contrato",
        details={"step": step, "returned": repr(returned)},
        hint=hint,
    )


def _failure_details(step: Optional[str], exc_type: Optional[str], exc_message: Optional[str]) -> Dict[str, Any]:
    return {"step": step, "exc_type": exc_type, "exc_message": exc_message}


def step_aborted(
    *,
    step: str,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Consulte os eventos da run filtrando pelo step indicado.",
) -> DataflowErrorPayload:
    return DataflowErrorPayload(
        type=STEP_ABORTED,
        message="Step abortou a execução do dataflow",
        details=_failure_details(step, exc_type, exc_message),
        hint=hint,
    )


def engine_execution_error(
    *,
    step: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Consulte os eventos da run (step_id None) para diagnosticar a falha.",
) -> DataflowErrorPayload:
    return DataflowErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message="Falha inesperada durante a execução do dataflow",
        details=_failure_details(step, exc_type, exc_message),
        hint=hint,
    )
