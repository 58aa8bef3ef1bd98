# src/canpi_config/core/table/errors.py
"""
Exceções canônicas dos acessores da tabela de configuração.

Estas exceções são sempre locais a uma única chamada (`get`,
`get_visible`, `set`): nunca invalidam a tabela nem afetam outros itens.

Cada tipo é distinguível para que a camada de UI reaja adequadamente
(ex.: desabilitar um controle vs. exibir mensagem de validação).

Invariantes:
    - Todas as exceções herdam de `ConfigTableError`
    - `item` identifica sempre o item envolvido
"""

from __future__ import annotations


class ConfigTableError(Exception):
    """Erro base de acesso à tabela de configuração."""

    def __init__(self, message: str, *, item: str) -> None:
        super().__init__(message)
        self.item = item


class NotFoundError(ConfigTableError):
    """Nenhum item com este nome existe na tabela."""

    def __init__(self, item: str) -> None:
        super().__init__(f"unknown configuration item: {item}", item=item)


class HiddenError(ConfigTableError):
    """Item oculto não pode ser lido por chamadores externos."""

    def __init__(self, item: str) -> None:
        super().__init__(f"configuration item is hidden: {item}", item=item)


class ReadOnlyError(ConfigTableError):
    """Item somente-leitura (view-only ou hidden) não pode ser alterado."""

    def __init__(self, item: str, visibility: str) -> None:
        super().__init__(f"configuration item is not editable ({visibility}): {item}", item=item)
        self.visibility = visibility


class ItemTypeError(ConfigTableError, TypeError):
    """Valor incompatível com o tipo, as opções ou o formato do item."""
