# tests/core/pipeline/test_types.py
"""
Testes do vocabulário de status (EngineStatus).

Invariantes:
    - Os valores numéricos são estáveis e seguem a ordem do ciclo de vida
    - O rótulo textual é o nome em minúsculas
"""

from dataflows.core.pipeline.types import EngineStatus


def test_status_values_are_stable():
    assert [s.name for s in EngineStatus] == [
        "NEW",
        "INITIALISED",
        "BLOCKED",
        "WAITING",
        "PROCESSING",
        "FLOWING",
        "FINISHED",
        "CANCELLED",
        "ABORTED",
        "FINALISED",
    ]
    assert [int(s) for s in EngineStatus] == list(range(10))
    assert EngineStatus.FINISHED < EngineStatus.ABORTED


def test_label_and_terminal():
    assert EngineStatus.FLOWING.label == "flowing"
    assert EngineStatus.FINISHED.is_terminal
    assert EngineStatus.CANCELLED.is_terminal
    assert not EngineStatus.ABORTED.is_terminal
    assert not EngineStatus.WAITING.is_terminal
