"""
Sobreposição recursiva de configurações (deep-merge).

Regras por par (base, override) de uma mesma chave:
    - mapeamento + mapeamento → recursão
    - override lista          → substitui a lista inteira
    - um dos lados None       → o override vence (permite `path: null` nos defaults)
    - tipos diferentes        → ConfigTypeConflictError
    - demais casos            → o override vence

Nenhuma das entradas é alterada; o resultado não compartilha objetos
mutáveis com elas.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _overlay(key: str, current: Any, value: Any) -> Any:
    if isinstance(current, dict) and isinstance(value, dict):
        return deep_merge(current, value)
    if isinstance(value, list) or current is None or value is None:
        return deepcopy(value)
    if type(current) is not type(value):
        raise ConfigTypeConflictError(
            f"Chave '{key}' muda de tipo: {type(current).__name__} → {type(value).__name__}"
        )
    return deepcopy(value)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Aplica `override` sobre `base` e retorna um novo dicionário.

    Raises:
        ConfigTypeConflictError: raiz não-dict ou mudança de tipo em alguma chave.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"deep_merge espera dois dicts, recebido {type(base).__name__} e {type(override).__name__}"
        )

    merged = deepcopy(base)
    for key, value in override.items():
        merged[key] = _overlay(key, merged[key], value) if key in merged else deepcopy(value)
    return merged
