"""Flow cap: terminador sintético de blocos de flow.

Um flow cap não existe na definição do usuário. O Engine o injeta como
único downstream de cada flow step sem downstreams, dando ao bloco um
ponto de pull. Não possui lógica de negócio: consome o registro do
upstream, pede o próximo (WAITING) e repassa FINISHED/CANCELLED quando o
upstream termina.
"""

from __future__ import annotations

from typing import Any

from dataflows.core.pipeline.definition import StepDefinition

from .base import FlowEngineStep, FlowStepType

FLOW_CAP_TYPE = "flow_cap"


class FlowCapEngineStep(FlowEngineStep):
    """Flow sem downstreams: repassa o registro recebido sem transformá-lo."""


class FlowCap(FlowStepType):
    engine_step_class = FlowCapEngineStep

    def create(self, engine: Any, number: int) -> FlowCapEngineStep:
        name = f"flowcap-{number}"
        return self.get_engine_step(engine, StepDefinition(id=name, type=FLOW_CAP_TYPE, name=name))
