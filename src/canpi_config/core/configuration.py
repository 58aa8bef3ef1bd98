# src/canpi_config/core/configuration.py
"""
Orquestração canônica de carga e gravação da configuração do canpi.

A configuração efetiva é resolvida a partir de:
    - um arquivo de definições (obrigatório)
    - um arquivo de runtime com os valores persistidos (opcional)

Responsabilidades do módulo:
    - Carregar e validar o documento de definições
    - Ler o arquivo de runtime, tolerando sua ausência
    - Construir a `ConfigTable` via merge
    - Persistir a tabela de volta no formato de runtime

Princípios fundamentais:
    - Definições são a base canônica; o runtime atua apenas como override
    - A ausência do arquivo de runtime não é erro (apenas defaults)
    - Um arquivo de runtime malformado é reportado ao chamador

Limites explícitos:
    - Não aplica locking de arquivo
    - Não se recupera de `ParseError` (decisão do chamador)
    - Não mantém estado global
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .context import ConfigContext
from .definitions.loader import load_definition_file
from .definitions.validation import Validator
from .runtime.reader import read_runtime_file
from .runtime.writer import write_runtime_file
from .table.table import ConfigTable


def load_configuration(
    *,
    definition_path: str | Path,
    runtime_path: Optional[str | Path] = None,
    validator: Optional[Validator] = None,
    context: Optional[ConfigContext] = None,
) -> ConfigTable:
    """
    Carrega definições e valores persistidos e constrói a tabela.

    Args:
        definition_path: caminho do documento de definições (JSON/YAML).
        runtime_path: caminho opcional do arquivo de runtime.
        validator: validador estrutural do documento de definições.
        context: contexto opcional para registro de eventos.

    Returns:
        ConfigTable resolvida.

    Raises:
        DefinitionError: qualquer falha de leitura/validação das definições.
        ParseError: arquivo de runtime existente e malformado.
    """
    schemas = load_definition_file(definition_path, validator=validator)
    if context is not None:
        context.log(
            scope="definitions",
            level="INFO",
            message="definitions.loaded",
            path=str(definition_path),
            items=len(schemas),
        )

    raw = None
    if runtime_path is not None:
        raw = read_runtime_file(runtime_path)
        if context is not None:
            if raw is None:
                context.log(
                    scope="runtime",
                    level="INFO",
                    message="runtime.absent",
                    path=str(runtime_path),
                )
            else:
                context.log(
                    scope="runtime",
                    level="INFO",
                    message="runtime.loaded",
                    path=str(runtime_path),
                    entries=len(raw),
                )

    return ConfigTable.build(schemas, raw, context=context)


def save_configuration(
    table: ConfigTable,
    *,
    runtime_path: str | Path,
    context: Optional[ConfigContext] = None,
) -> str:
    """Persiste a tabela no arquivo de runtime e retorna o texto gravado."""
    text = write_runtime_file(runtime_path, table.to_raw_mapping(), sections=table.sections())
    if context is not None:
        context.log(
            scope="runtime",
            level="INFO",
            message="runtime.saved",
            path=str(runtime_path),
            entries=len(table),
        )
    return text
