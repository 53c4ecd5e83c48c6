# src/dataflows/core/__init__.py
"""
Core do dataflows.

Reúne as responsabilidades essenciais para construir e executar uma run:
configuração, definição do dataflow, contrato de Step e Engine.

O core é projetado para ser:
    - determinístico para a mesma definição e os mesmos steps
    - testável de forma isolada
    - livre de dependências de UI ou de persistência concreta
"""
