# src/dataflows/__init__.py
"""
dataflows — engine de execução de pipelines de Steps (connectors e flows).

Um dataflow é um DAG de Steps: connectors processam unidades discretas
de trabalho e flows processam registros um a um dentro de um bloco
delimitado. O Engine transforma o grafo estático mais as dependências
declaradas em uma run ordenada, abortável e observável.

Arquitetura em alto nível:
    - core.config   → carregamento de configuração e variáveis globais
    - core.pipeline → definição do dataflow, contrato de Step, registry, contexto
    - core.engine   → grafo da run, flow caps e escalonador
    - steps         → engine steps genéricos (connector, flow, flow cap)

Limites explícitos:
    - Não define Steps concretos de domínio
    - Não valida ciclos nem importa/exporta YAML de dataflows
"""
# src/dataflows/__init__.py
from .core.engine import Engine, RunOutcome
from .core.pipeline import (
    Dataflow,
    EngineStatus,
    RunContext,
    StepDefinition,
    StepTypeRegistry,
)

__all__ = [
    "Dataflow",
    "Engine",
    "EngineStatus",
    "RunContext",
    "RunOutcome",
    "StepDefinition",
    "StepTypeRegistry",
]
