"""
Erros da camada de configuração.

Cobrem arquivos de configuração e o store de variáveis globais. Nenhum
deles representa falha de Step: são levantados antes da run (ou em
`set_global_var`) e propagam direto ao chamador.
"""


class ConfigError(Exception):
    """Raiz comum dos erros de configuração."""


class ConfigNotFoundError(ConfigError):
    """Arquivo de configuração obrigatório ausente."""


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada.

    Arquivos de configuração aceitam YAML e JSON; o store de variáveis
    globais aceita apenas YAML.
    """


class InvalidConfigRootTypeError(ConfigError):
    """Documento cuja raiz não é um mapeamento."""


class ConfigTypeConflictError(ConfigError):
    """
    Override que troca o tipo de uma chave já existente.

    Exemplo:
        - defaults: {"globals": {"path": "vars.yaml"}}
        - local:    {"globals": "vars.yaml"}
    """
