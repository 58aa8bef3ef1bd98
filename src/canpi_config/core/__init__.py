# src/canpi_config/core/__init__.py
"""
Core do canpi-config.

Este pacote contém a implementação canônica da carga, merge e gravação
da configuração do servidor canpi.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de estado global

Subpacotes:
    - core.definitions   → modelo de item, validação e loader de definições
    - core.runtime       → leitura/escrita do arquivo key=value
    - core.table         → merge engine e acessores com visibilidade
    - core.context       → eventos e warnings estruturados
    - core.configuration → orquestração de carga/gravação em arquivo
"""

# definitions primeiro: o loader depende de core.table.coercion
from . import definitions  # noqa: F401
from . import runtime  # noqa: F401
from . import table  # noqa: F401
