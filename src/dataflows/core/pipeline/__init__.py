# src/dataflows/core/pipeline/__init__.py
"""
# Pipeline Core — dataflows

Contratos e estruturas fundamentais de um dataflow.

## Componentes

- **types**: `EngineStatus`, o vocabulário fechado de sinais
- **definition**: `StepDefinition`, `Dataflow`, `DataflowStore`
- **step**: `EngineStep` e `StepType` (Protocols)
- **registry**: `StepTypeRegistry` (tag → fábrica)
- **context**: `RunContext` (identidade da run e log estruturado)

## Princípios

- Steps **não conhecem** a fila do Engine
- Dependências são **explícitas e declarativas**
- Tipos desconhecidos falham **antes** da run
"""
from .context import RunContext
from .definition import (
    Dataflow,
    DataflowStore,
    DuplicateStepIdError,
    StepDefinition,
    UnknownDependencyError,
)
from .registry import DuplicateStepTypeError, StepTypeRegistry, UnknownStepTypeError
from .step import EngineStep, StepType
from .types import EngineStatus

__all__ = [
    "Dataflow",
    "DataflowStore",
    "DuplicateStepIdError",
    "DuplicateStepTypeError",
    "EngineStatus",
    "EngineStep",
    "RunContext",
    "StepDefinition",
    "StepType",
    "StepTypeRegistry",
    "UnknownDependencyError",
    "UnknownStepTypeError",
]
