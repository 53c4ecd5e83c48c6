# tests/core/engine/test_graph.py
"""
Testes da arena de engine steps (StepGraph).

Invariantes:
    - link() grava as duas direções e ignora arestas repetidas
    - ids são únicos na arena
    - após freeze(), nenhum nó ou aresta é adicionado
"""

from types import SimpleNamespace

import pytest

from dataflows.core.engine.graph import GraphFrozenError, StepGraph
from dataflows.core.pipeline.definition import DuplicateStepIdError


def _node(step_id):
    return SimpleNamespace(id=step_id)


def test_add_and_link_symmetric():
    g = StepGraph()
    a = g.add(_node("a"))
    b = g.add(_node("b"))
    c = g.add(_node("c"))

    g.link(a, c)
    g.link(b, c)
    g.link(a, c)

    assert len(g) == 3
    assert "b" in g
    assert list(g.upstreams_of(c)) == ["a", "b"]
    assert list(g.downstreams_of(a)) == ["c"]
    assert g.downstreams_of(c) == {}
    assert g.nodes()[g.index_of("b")].id == "b"


def test_duplicate_id_rejected():
    g = StepGraph()
    g.add(_node("a"))

    with pytest.raises(DuplicateStepIdError):
        g.add(_node("a"))


def test_frozen_graph_rejects_changes():
    g = StepGraph()
    a = g.add(_node("a"))
    b = g.add(_node("b"))
    g.freeze()

    assert g.frozen
    with pytest.raises(GraphFrozenError):
        g.add(_node("c"))
    with pytest.raises(GraphFrozenError):
        g.link(a, b)


def test_nodes_returns_copy():
    g = StepGraph()
    g.add(_node("a"))

    g.nodes().clear()

    assert len(g) == 1
