# src/dataflows/core/pipeline/types.py
"""
Tipos canônicos de execução do dataflows.

Este módulo define o vocabulário fechado de sinais trocados entre o
Engine e os engine steps durante uma run.

Componentes principais:
    - EngineStatus → enum totalmente ordenado de estados de execução

Princípios fundamentais:
    - O conjunto de estados é fechado
    - Os valores numéricos são estáveis e ordenados
    - Nenhuma lógica de escalonamento vive neste módulo

Invariantes:
    - Todo status retornado por um step pertence a este enum
    - O rótulo textual (`label`) é estável e usado em logs

Limites explícitos:
    - Não decide mutações de fila
    - Não executa Steps
    - Não depende de engine, pipeline ou UI

Este módulo existe para garantir um contrato único e
inequívoco entre o Engine e os Steps.
"""

from __future__ import annotations

from enum import IntEnum


class EngineStatus(IntEnum):
    """
    Estados de execução compartilhados pelo Engine e pelos engine steps.

    Estados definidos:
        - NEW: recém-criado
        - INITIALISED: inicializado, pronto para executar
        - BLOCKED: connector não pode prosseguir, aguardando upstreams
        - WAITING: flow não pode prosseguir, aguardando upstreams
        - PROCESSING: connector em processamento
        - FLOWING: flow produziu (ou repassou) um registro
        - FINISHED: atividade encerrada; downstreams podem prosseguir
        - CANCELLED: encerrado voluntariamente sem completar
        - ABORTED: execução abortada, não pode terminar
        - FINALISED: step/dataflow completamente encerrado

    Decisões arquiteturais:
        - IntEnum garante ordenação total e comparação direta
        - Os valores seguem a ordem do ciclo de vida

    Limites explícitos:
        - Não codifica a tabela de mutação de fila (responsabilidade do Engine)
    """
    NEW = 0
    INITIALISED = 1
    BLOCKED = 2
    WAITING = 3
    PROCESSING = 4
    FLOWING = 5
    FINISHED = 6
    CANCELLED = 7
    ABORTED = 8
    FINALISED = 9

    @property
    def label(self) -> str:
        """Rótulo textual estável (ex.: 'finished')."""
        return self.name.lower()

    @property
    def is_terminal(self) -> bool:
        return self in (EngineStatus.FINISHED, EngineStatus.CANCELLED)
