# tests/conftest.py
"""
Fixtures compartilhados para testes do canpi-config.

Este módulo define fixtures reutilizáveis que fornecem:
- um documento de definições semelhante ao usado pelo canpi em campo
- o mesmo documento no formato lista de registros
- um arquivo de runtime com seções e valores entre aspas
- o conjunto de `ItemSchema` já materializado

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Dados retornados são determinísticos e isolados (novas cópias a cada teste)
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

import pytest


@pytest.fixture
def canpi_definitions() -> dict:
    """
    Documento de definições no formato mapa (nome -> registro).

    Espelha o formato do arquivo de definições distribuído com o canpi,
    onde os defaults são texto e a chave do mapa é o nome do item.

    Returns:
        dict: Documento de definições com itens de todas as visibilidades.
    """
    return {
        "canid": {
            "prompt": "CAN Id",
            "tooltip": "The CAN Id used by the CAN Pi CAP/Zero on the CBUS",
            "type": "integer",
            "default": "100",
            "format": "[0-9]{1,4}",
            "visibility": "view-only",
        },
        "node_number": {
            "prompt": "Node Number",
            "tooltip": "Module Node Number - change your peril",
            "type": "integer",
            "default": 4321,
            "format": "[0-9]{1,4}",
            "visibility": "view-only",
        },
        "start_event_id": {
            "prompt": "Start Event Id",
            "tooltip": "The event generated when the ED and GridConnect services start and stop",
            "type": "integer",
            "default": 1,
            "format": "[0-9]{1,2}",
            "visibility": "editable",
        },
        "node_mode": {
            "type": "integer",
            "default": 0,
            "visibility": "hidden",
        },
        "logging": {
            "prompt": "Log level",
            "type": "enum",
            "default": "INFO",
            "choices": ["DEBUG", "INFO", "WARN"],
            "visibility": "editable",
        },
        "edserver": {
            "prompt": "Start ED server",
            "type": "boolean",
            "default": "true",
            "visibility": "editable",
        },
        "router_ssid": {
            "prompt": "Router SSID",
            "type": "string",
            "default": "",
            "visibility": "editable",
            "section": "network",
        },
        "ap_ssid": {
            "prompt": "Access point SSID",
            "type": "string",
            "default": "canpi",
            "visibility": "editable",
            "section": "apmode",
        },
    }


@pytest.fixture
def canpi_definitions_list(canpi_definitions) -> list:
    """Mesmo documento de `canpi_definitions`, no formato lista de registros."""
    return [{"name": name, **record} for name, record in canpi_definitions.items()]


@pytest.fixture
def canpi_runtime_text() -> str:
    """
    Conteúdo típico de um `canpi.cfg` em campo.

    Inclui comentário, espaços ao redor de `=`, valor entre aspas,
    seções INI e uma chave obsoleta sem definição.
    """
    return """\
# canpi configuration
canid=101
node_number=5432
start_event_id = 2
node_mode=1
obsolete_key=1
[network]
router_ssid = "home"
[apmode]
ap_ssid = canpi
"""


@pytest.fixture
def canpi_schemas(canpi_definitions):
    """Conjunto de `ItemSchema` materializado a partir de `canpi_definitions`."""
    from canpi_config.core.definitions.loader import load_definitions

    return load_definitions(canpi_definitions)
