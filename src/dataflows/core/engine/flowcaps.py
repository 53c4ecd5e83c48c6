# src/dataflows/core/engine/flowcaps.py
"""
Injeção de flow caps.

Todo flow step sem downstreams recebe um flow cap como único downstream,
fechando o bloco de flow com um ponto de pull. Os caps são numerados
sequencialmente a partir de 1 (`flowcap-<n>`), na ordem de construção
dos engine steps.

Limites explícitos:
    - Assume blocos de flow sem ramificações
    - Não altera steps que já possuem downstreams
"""

from __future__ import annotations

from typing import Any, List

from dataflows.steps.flow_cap import FlowCap

from .graph import StepGraph


def inject_flow_caps(engine: Any, graph: StepGraph) -> List[Any]:
    """
    Cria e liga um flow cap para cada flow step terminal do grafo.

    Args:
        engine: Engine proprietário da run (repassado aos caps).
        graph (StepGraph): grafo ainda mutável da run.

    Returns:
        List: caps criados, em ordem de numeração.

    Raises:
        DuplicateStepIdError: se `flowcap-<n>` colidir com um step do usuário.
    """
    # TODO: blocos de flow com ramificações exigem mais de um cap por bloco.
    factory = FlowCap()
    caps: List[Any] = []
    for step in graph.nodes():
        if step.is_flow and len(step.downstreams) == 0:
            cap = factory.create(engine, len(caps) + 1)
            idx = graph.add(cap)
            cap.bind(graph, idx)
            graph.link(graph.index_of(step.id), idx)
            caps.append(cap)
    return caps
