# src/dataflows/core/engine/__init__.py
"""
Engine do dataflows.

Componentes principais:
    - graph    → arena de engine steps com arestas por índice
    - flowcaps → injeção de terminadores sintéticos de blocos de flow
    - engine   → ciclo de vida, fila e protocolo de abort

Invariantes:
    - A topologia é congelada antes da primeira execução
    - Apenas o Engine muta a fila e o status da run
    - Nenhuma falha é escondida atrás de um status terminal normal

Limites explícitos:
    - Não valida ciclos
    - Não possui timeout nem detecção de deadlock
"""
from .engine import Engine, RunOutcome
from .graph import GraphFrozenError, StepGraph

__all__ = ["Engine", "GraphFrozenError", "RunOutcome", "StepGraph"]
