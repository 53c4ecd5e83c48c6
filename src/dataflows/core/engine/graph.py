# src/dataflows/core/engine/graph.py
"""
Grafo de engine steps de uma run (arena).

Os engine steps de uma run vivem em uma lista plana (a arena), indexada
por um inteiro estável atribuído na inserção. As relações
upstream/downstream são armazenadas como listas de índices mantidas
pelo próprio grafo, e não como referências de posse entre steps.

Decisões arquiteturais:
    - `link()` grava as duas direções de uma vez (simetria por construção)
    - A topologia é congelada ao fim da construção do Engine
    - A ordem das arestas segue a ordem de declaração das dependências

Invariantes:
    - Se A é upstream de B, B é downstream de A
    - Após `freeze()`, nenhum nó ou aresta é adicionado
    - Ids de steps são únicos na arena

Limites explícitos:
    - Não valida ciclos
    - Não executa steps
"""

from __future__ import annotations

from typing import Any, Dict, List

from dataflows.core.pipeline.definition import DuplicateStepIdError


class GraphFrozenError(RuntimeError):
    """Tentativa de alterar a topologia após o início da run."""


class StepGraph:
    """Arena de engine steps com arestas por índice."""

    def __init__(self) -> None:
        self._nodes: List[Any] = []
        self._index: Dict[str, int] = {}
        self._up: List[List[int]] = []
        self._down: List[List[int]] = []
        self._frozen = False

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._index

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise GraphFrozenError("step graph topology is frozen for this run")

    def add(self, step: Any) -> int:
        self._check_mutable()
        if step.id in self._index:
            raise DuplicateStepIdError(f"Duplicate step id: {step.id}")
        idx = len(self._nodes)
        self._nodes.append(step)
        self._index[step.id] = idx
        self._up.append([])
        self._down.append([])
        return idx

    def index_of(self, step_id: str) -> int:
        return self._index[step_id]

    def nodes(self) -> List[Any]:
        return list(self._nodes)

    def link(self, upstream: int, downstream: int) -> None:
        self._check_mutable()
        if upstream not in self._up[downstream]:
            self._up[downstream].append(upstream)
            self._down[upstream].append(downstream)

    def freeze(self) -> None:
        self._frozen = True

    def upstreams_of(self, idx: int) -> Dict[str, Any]:
        return {self._nodes[i].id: self._nodes[i] for i in self._up[idx]}

    def downstreams_of(self, idx: int) -> Dict[str, Any]:
        return {self._nodes[i].id: self._nodes[i] for i in self._down[idx]}
