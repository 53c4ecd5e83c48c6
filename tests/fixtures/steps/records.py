"""
Record steps — dataflows (testes de integração)

Steps mínimos de flow e connector sem lógica de domínio real:
- ListReader: fonte de registros a partir de `config["records"]`
- Upper: transforma strings em maiúsculas; descarta registros vazios
- Collect: flow que anexa cada registro em `config["out"]`
- Mark: connector que anexa o próprio id em `config["out"]`
- Explode: connector que falha ao executar
"""

from __future__ import annotations

from dataflows.steps.base import ConnectorEngineStep, ConnectorStepType, FlowEngineStep, FlowStepType


class ListReader(FlowEngineStep):
    def records(self):
        return iter(self.config.get("records", []))


class Upper(FlowEngineStep):
    def execute(self, record):
        if not record:
            return None
        return record.upper()


class Collect(FlowEngineStep):
    def execute(self, record):
        self.config["out"].append(record)
        return record


class Mark(ConnectorEngineStep):
    def execute(self):
        self.config["out"].append(self.id)
        return self.config.get("result")


class Explode(ConnectorEngineStep):
    def execute(self):
        raise RuntimeError("boom")


class ListReaderType(FlowStepType):
    engine_step_class = ListReader


class UpperType(FlowStepType):
    engine_step_class = Upper


class CollectType(FlowStepType):
    engine_step_class = Collect


class MarkType(ConnectorStepType):
    engine_step_class = Mark


class ExplodeType(ConnectorStepType):
    engine_step_class = Explode
