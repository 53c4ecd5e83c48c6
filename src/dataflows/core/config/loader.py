# src/dataflows/core/config/loader.py
"""
Leitura da configuração de processo do dataflows.

A configuração efetiva de uma run é montada a partir de dois arquivos:
    - defaults: obrigatório, versionado junto ao deploy
    - local: opcional, sobrepõe os defaults na máquina do operador

O resultado alimenta o `RunContext` (campo `config`) e, a partir dele,
o store de variáveis globais (`globals.path`).

Formatos aceitos:
    - YAML (.yaml, .yml) via PyYAML `safe_load`
    - JSON (.json)

Invariantes:
    - O retorno é sempre um `dict` novo
    - Um arquivo vazio equivale a `{}`
    - O arquivo local nunca mascara a ausência dos defaults

Limites explícitos:
    - Não interpreta chaves (isso cabe a quem consome a configuração)
    - Não importa definições de dataflow
"""

from pathlib import Path
from typing import Any, Callable, Dict, IO, Optional, Union
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    ConfigNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


YAML_SUFFIXES = {".yaml", ".yml"}

_READERS: Dict[str, Callable[[IO[str]], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.load,
}


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Lê um único arquivo de configuração.

    Args:
        path: caminho do arquivo (.yaml, .yml ou .json).

    Returns:
        Dict[str, Any]: mapeamento de nível raiz do arquivo.

    Raises:
        ConfigNotFoundError: arquivo inexistente.
        UnsupportedConfigFormatError: extensão fora dos formatos aceitos.
        InvalidConfigRootTypeError: raiz do documento não é um mapeamento.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise UnsupportedConfigFormatError(
            f"Extensão '{path.suffix}' não suportada (use {', '.join(sorted(_READERS))})"
        )

    with path.open("r", encoding="utf-8") as f:
        data = reader(f)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"{path.name}: raiz deve ser um mapeamento, recebido {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: Union[str, Path],
    local_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Monta a configuração efetiva: defaults sobrepostos pelo arquivo local.

    O arquivo local é ignorado quando não existe; quando existe, passa
    pelas mesmas validações dos defaults antes do `deep_merge`.

    Raises:
        ConfigNotFoundError: defaults inexistentes.
        ConfigTypeConflictError: o arquivo local muda o tipo de uma chave.
    """
    effective = load_config_file(defaults_path)

    if local_path is None or not Path(local_path).exists():
        return effective

    return deep_merge(effective, load_config_file(local_path))
