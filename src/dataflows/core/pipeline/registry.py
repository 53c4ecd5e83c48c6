# src/dataflows/core/pipeline/registry.py
"""
Registro de tipos de Step do dataflows.

Este módulo define o `StepTypeRegistry`, que mapeia uma tag textual
(`StepDefinition.type`) para a fábrica (`StepType`) capaz de produzir o
engine step correspondente.

O registry atua como uma camada de proteção antecipada:
    - cada tag é única e não vazia
    - tipos desconhecidos falham na validação, antes de qualquer run
    - a ordem de registro é preservada

Decisões arquiteturais:
    - Nenhuma instanciação dinâmica por nome de classe
    - A validação de um dataflow ocorre antes da construção do grafo

Limites explícitos:
    - Não constrói engine steps por conta própria
    - Não executa dataflows
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .definition import Dataflow
from .step import StepType


class DuplicateStepTypeError(ValueError):
    """Exceção levantada ao registrar duas vezes a mesma tag de tipo."""


class UnknownStepTypeError(KeyError):
    """
    Exceção levantada quando uma tag de tipo não está registrada.

    Levantada por `get` e por `validate`, sempre antes da execução.
    """

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


@dataclass
class StepTypeRegistry:
    """Mapa tag → StepType, com validação estrutural pré-execução."""

    _types: Dict[str, StepType] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def register(self, tag: str, step_type: StepType) -> None:
        if not isinstance(tag, str) or not tag.strip():
            raise ValueError("step type tag must be a non-empty string")

        if tag in self._types:
            raise DuplicateStepTypeError(f"Duplicate step type: {tag}")

        if not isinstance(step_type, StepType):
            raise TypeError(f"Step type '{tag}' must define is_flow and get_engine_step()")

        self._types[tag] = step_type
        self._order.append(tag)

    def get(self, tag: str) -> StepType:
        if tag not in self._types:
            raise UnknownStepTypeError(f"Unknown step type: {tag}{self._known()}")
        return self._types[tag]

    def __contains__(self, tag: object) -> bool:
        return tag in self._types

    def tags(self) -> List[str]:
        return list(self._order)

    def _known(self) -> str:
        return f" (registered: {', '.join(self.tags())})" if self._order else ""

    def validate(self, dataflow: Dataflow) -> None:
        """Falha no primeiro Step cujo tipo não está registrado."""
        for stepdef in dataflow.steps:
            if stepdef.type not in self._types:
                raise UnknownStepTypeError(
                    f"Step '{stepdef.id}' has unknown type '{stepdef.type}'{self._known()}"
                )
