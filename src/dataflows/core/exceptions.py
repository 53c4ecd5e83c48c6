"""
Exceções tipadas do Engine.

Duas famílias:
- EngineContractViolation: o protocolo Engine ↔ Step ↔ chamador foi
  quebrado (status inválido do Engine, status inesperado de um Step).
  Nunca é re-tentada.
- EngineConfigurationError / EngineExecutionError: dataflow inconsistente
  na construção, ou abort sem exceção de origem.

Todas carregam `message`, `details` e `hint`, os mesmos campos de
`DataflowErrorPayload`, para que o Engine converta uma na outra sem perda.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from .errors import ENGINE_BAD_STATUS, ENGINE_EXECUTION_ERROR, ENGINE_UNEXPECTED_STEP_STATUS


@dataclass(frozen=True)
class DataflowException(Exception):
    """Base das exceções do dataflows; `details` deve ser serializável."""

    # código estável do payload; None usa o nome da classe
    code: ClassVar[Optional[str]] = None

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Violações de contrato (fatais, nunca re-tentadas)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EngineContractViolation(DataflowException):
    """O protocolo entre Engine, Steps e chamador foi quebrado."""


@dataclass(frozen=True)
class BadEngineStatusError(EngineContractViolation):
    """Operação chamada com o Engine em status inválido."""

    code: ClassVar[Optional[str]] = ENGINE_BAD_STATUS


@dataclass(frozen=True)
class UnexpectedStepStatusError(EngineContractViolation):
    """Step retornou um status fora do conjunto tratado pelo escalonador."""

    code: ClassVar[Optional[str]] = ENGINE_UNEXPECTED_STEP_STATUS


# ---------------------------------------------------------------------------
# Engine / Configuração
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EngineConfigurationError(DataflowException):
    """Configuração inválida ou inconsistente para execução."""


@dataclass(frozen=True)
class EngineExecutionError(DataflowException):
    """Erro de execução sem exceção de origem (ex.: Step abortou sem capturar falha)."""

    code: ClassVar[Optional[str]] = ENGINE_EXECUTION_ERROR
