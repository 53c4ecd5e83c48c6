# src/dataflows/core/config/store.py
"""
Store de variáveis globais (nível de processo) do dataflows.

Variáveis globais são valores nomeados compartilhados por todos os
dataflows, persistidos como um único documento YAML. Diferente das
variáveis de dataflow, a persistência aqui **independe** de dry run:
toda escrita é gravada imediatamente.

Decisões arquiteturais:
    - O documento é relido antes de cada escrita (última escrita vence)
    - Sem `path`, o store opera apenas em memória
    - Serialização via `yaml.safe_dump`, leitura via loader canônico

Limites explícitos:
    - Não oferece suporte a variáveis por instância
    - Não controla concorrência entre processos
"""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from .errors import UnsupportedConfigFormatError
from .loader import YAML_SUFFIXES, load_config_file


class GlobalVarsStore:
    """Variáveis globais persistidas em YAML (ou em memória, sem path)."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path: Optional[Path] = Path(path) if path is not None else None
        if self.path is not None and self.path.suffix.lower() not in YAML_SUFFIXES:
            raise UnsupportedConfigFormatError(
                f"Store de variáveis globais requer YAML, recebido: {self.path.suffix}"
            )
        self._memory: Dict[str, Any] = {}

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "GlobalVarsStore":
        globals_cfg = (config or {}).get("globals", {}) or {}
        return cls(globals_cfg.get("path"))

    def load(self) -> Dict[str, Any]:
        if self.path is None:
            return deepcopy(self._memory)
        if not self.path.exists():
            return {}
        return load_config_file(self.path)

    def get(self, name: str, default: Any = None) -> Any:
        return self.load().get(name, default)

    def set_var(self, name: str, value: Any) -> Any:
        """Grava `name` e retorna o valor anterior (ou None)."""
        data = self.load()
        previous = data.get(name)
        data[name] = value

        if self.path is None:
            self._memory = data
            return previous

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=True, allow_unicode=True)
        return previous
