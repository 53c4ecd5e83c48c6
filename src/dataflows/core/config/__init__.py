# src/dataflows/core/config/__init__.py

"""
Camada de configuração do dataflows.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Persistência das variáveis globais (nível de processo) em YAML

Limites explícitos:
    - Não executa dataflows
    - Não interage com Steps diretamente
"""

from .errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .loader import load_config, load_config_file
from .merge import deep_merge
from .store import GlobalVarsStore

__all__ = [
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigTypeConflictError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "GlobalVarsStore",
    "deep_merge",
    "load_config",
    "load_config_file",
]
