# src/dataflows/core/pipeline/step.py
"""
Contrato canônico entre o Engine e os engine steps.

Um engine step é o nó vivo, criado a cada run, que envolve uma
`StepDefinition` estática. O Engine consome engine steps de forma
polimórfica apenas através deste contrato e interpreta exclusivamente
o status retornado por `go()`.

Princípios fundamentais:
    - Steps nunca mutam a fila nem o status do Engine
    - A comunicação Step → Engine ocorre apenas pelo status retornado
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não define lógica de negócio de Steps concretos
    - Não define políticas de escalonamento
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from .definition import StepDefinition
from .types import EngineStatus


@runtime_checkable
class EngineStep(Protocol):
    """
    Contrato mínimo de um engine step.

    Atributos obrigatórios:
        - id: espelha `StepDefinition.id`, único na run
        - name: nome legível
        - is_flow: classificação fixa (flow vs connector)
        - upstreams / downstreams: mapas id → engine step (referências, não posse)
        - status: último status do próprio step
        - exception: falha capturada quando `go()` retorna ABORTED

    Invariantes:
        - `is_flow` não muda após a construção
        - upstreams/downstreams são simétricos e congelados antes da run
    """
    id: str
    name: str
    is_flow: bool
    status: EngineStatus
    exception: Optional[BaseException]

    @property
    def upstreams(self) -> Mapping[str, "EngineStep"]:
        ...

    @property
    def downstreams(self) -> Mapping[str, "EngineStep"]:
        ...

    def bind(self, graph: Any, index: int) -> None:
        """Associa o step à sua posição no grafo da run."""
        ...

    def initialise(self) -> None:
        """Prepara recursos do step antes da run."""
        ...

    def go(self) -> EngineStatus:
        """Executa uma unidade de trabalho e retorna o sinal resultante."""
        ...

    def abort(self) -> None:
        """Encerra graciosamente iteradores e recursos em andamento."""
        ...

    def finalise(self) -> None:
        """Libera recursos (idempotente)."""
        ...


@runtime_checkable
class StepType(Protocol):
    """
    Fábrica de engine steps associada a uma tag no StepTypeRegistry.

    Substitui a instanciação dinâmica por nome de classe: o tipo é
    resolvido no registry e apenas então produz o engine step.
    """
    is_flow: bool

    def get_engine_step(self, engine: Any, stepdef: StepDefinition) -> EngineStep:
        ...
