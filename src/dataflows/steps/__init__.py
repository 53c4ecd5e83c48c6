"""Engine steps genéricos (sem lógica de domínio)."""
from .base import (
    BaseEngineStep,
    ConnectorEngineStep,
    ConnectorStepType,
    FlowEngineStep,
    FlowStepType,
    StepTypeBase,
)
from .flow_cap import FLOW_CAP_TYPE, FlowCap, FlowCapEngineStep

__all__ = [
    "BaseEngineStep",
    "ConnectorEngineStep",
    "ConnectorStepType",
    "FLOW_CAP_TYPE",
    "FlowCap",
    "FlowCapEngineStep",
    "FlowEngineStep",
    "FlowStepType",
    "StepTypeBase",
]
