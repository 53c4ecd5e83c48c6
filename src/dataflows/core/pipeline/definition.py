# src/dataflows/core/pipeline/definition.py
"""
Definição estática de um dataflow.

Este módulo define as estruturas que representam o dataflow tal como
configurado pelo usuário: a lista ordenada de definições de Step, suas
dependências declaradas e as variáveis de nível de dataflow.

Do ponto de vista do Engine, estas estruturas são somente leitura
durante uma run, com exceção das variáveis (`set_var`).

Decisões arquiteturais:
    - `StepDefinition` é imutável
    - A ordem das definições é preservada e determina a ordem de construção
    - Dependências são declaradas por `id` e resolvidas sob demanda
    - A persistência é delegada a um `DataflowStore` externo

Invariantes:
    - Cada `StepDefinition.id` é único no dataflow
    - `dependencies()` nunca retorna definições inexistentes

Limites explícitos:
    - Não valida ciclos (DAG)
    - Não importa nem exporta YAML de dataflows
    - Não instancia engine steps
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable


class DuplicateStepIdError(ValueError):
    """
    Exceção levantada quando dois Steps compartilham o mesmo `id`.

    A duplicidade é tratada como erro fatal de configuração e é
    detectada na construção do dataflow (ou na injeção de flow caps),
    antes de qualquer execução.
    """


class UnknownDependencyError(ValueError):
    """
    Exceção levantada quando um Step referencia uma dependência inexistente.

    Limites explícitos:
        - Não tenta inferir ou criar Steps ausentes
    """


@dataclass(frozen=True)
class StepDefinition:
    """
    Definição estática de um Step.

    Campos:
        - id: identificador único e estável no dataflow
        - type: tag do tipo de Step (resolvida no StepTypeRegistry)
        - depends_on: ids dos Steps dos quais este depende
        - name: nome legível (default: o próprio id)
        - config: configuração livre do Step
    """
    id: str
    type: str
    depends_on: Sequence[str] = ()
    name: str = ""
    config: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("step.id must be a non-empty string")
        object.__setattr__(self, "depends_on", tuple(self.depends_on))
        if not self.name:
            object.__setattr__(self, "name", self.id)


@runtime_checkable
class DataflowStore(Protocol):
    """Camada de persistência de dataflows (colaborador externo)."""

    def save(self, dataflow: "Dataflow") -> None:
        ...


@dataclass
class Dataflow:
    """
    Dataflow definido pelo usuário.

    Campos:
        - name: nome legível (usado nos logs da run)
        - steps: definições de Step em ordem de declaração
        - enabled: dataflows desabilitados só executam em dry run ou gatilho manual
        - variables: variáveis de nível de dataflow
        - config: configuração livre do dataflow
        - id: identidade opcional atribuída pela persistência
    """
    name: str
    steps: List[StepDefinition] = field(default_factory=list)
    enabled: bool = True
    variables: Dict[str, Any] = field(default_factory=dict)
    config: Dict[str, Any] = field(default_factory=dict)
    id: Optional[int] = None

    def __post_init__(self) -> None:
        self.steps = list(self.steps)
        self._by_id: Dict[str, StepDefinition] = {}
        for stepdef in self.steps:
            if stepdef.id in self._by_id:
                raise DuplicateStepIdError(f"Duplicate step id: {stepdef.id}")
            self._by_id[stepdef.id] = stepdef

    def get_step(self, step_id: str) -> StepDefinition:
        return self._by_id[step_id]

    def dependencies(self, stepdef: StepDefinition) -> List[StepDefinition]:
        """Resolve as dependências declaradas de `stepdef`, na ordem declarada."""
        deps: List[StepDefinition] = []
        for dep_id in stepdef.depends_on:
            if dep_id not in self._by_id:
                raise UnknownDependencyError(
                    f"Step '{stepdef.id}' depends on unknown step '{dep_id}'"
                )
            deps.append(self._by_id[dep_id])
        return deps

    def set_var(self, name: str, value: Any) -> None:
        self.variables[name] = value
