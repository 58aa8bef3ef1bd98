# src/canpi_config/core/definitions/errors.py
"""
Exceções canônicas da camada de definições do canpi-config.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a leitura, validação estrutural e materialização do documento de
definição de itens de configuração.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de definição são tratados como falhas fatais
    - Mensagens identificam o item problemático sempre que possível

Invariantes:
    - Todas as exceções de definição herdam de `DefinitionError`
    - Nenhuma tabela de configuração parcial é produzida após um erro

Limites explícitos:
    - Não representa erros do arquivo de runtime
    - Não representa erros de acesso à tabela de configuração
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class DefinitionError(Exception):
    """Erro base do domínio de definições."""


class DefinitionFileNotFoundError(DefinitionError):
    """Arquivo de definições não existe no caminho informado."""


class UnsupportedDefinitionFormatError(DefinitionError):
    """Formato de arquivo de definições não suportado (JSON/YAML)."""


class DefinitionParseError(DefinitionError):
    """Falha ao parsear o arquivo de definições."""


class SchemaError(DefinitionError):
    """
    Documento de definições estruturalmente ou semanticamente inválido.

    Atributos:
        item: nome (ou posição) do item problemático, quando identificável.
        issues: lista completa de problemas reportados pelo validador.
    """

    def __init__(
        self,
        message: str,
        *,
        item: Optional[str] = None,
        issues: Sequence[Any] = (),
    ) -> None:
        super().__init__(message)
        self.item = item
        self.issues = list(issues)


class DuplicateNameError(SchemaError):
    """Dois itens do documento de definições compartilham o mesmo nome."""

    def __init__(self, name: str) -> None:
        super().__init__(f"duplicate item name: {name}", item=name)
