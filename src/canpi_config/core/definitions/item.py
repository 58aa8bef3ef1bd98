# src/canpi_config/core/definitions/item.py
"""
Modelo canônico de um item de configuração (ItemSchema).

Um item descreve os metadados estáticos de uma entrada de configuração:
nome, tipo de valor, default tipado e classe de visibilidade, além dos
metadados de apresentação herdados do formato de definição do canpi
(prompt, tooltip, format) e da seção INI onde o item é persistido.

Invariantes:
    - ItemSchema é imutável (frozen)
    - O default é sempre do tipo nativo correspondente a `value_type`
    - `choices` só é não vazio para itens `enum`

Limites explícitos:
    - Não valida documentos (ver `loader` e `validation`)
    - Não realiza coerção de strings (ver `core.table.coercion`)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ValueType(str, Enum):
    """Tipos de valor suportados por um item."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ENUM = "enum"


class Visibility(str, Enum):
    """Classe de visibilidade de um item para chamadores externos (UI)."""

    EDITABLE = "editable"
    VIEW_ONLY = "view-only"
    HIDDEN = "hidden"


@dataclass(frozen=True)
class ItemSchema:
    """Metadados estáticos de um item de configuração."""

    name: str
    value_type: ValueType
    default: Any
    visibility: Visibility
    prompt: str = ""
    tooltip: str = ""
    format: Optional[str] = None
    choices: Tuple[str, ...] = ()
    section: Optional[str] = None

    @property
    def is_hidden(self) -> bool:
        return self.visibility is Visibility.HIDDEN

    @property
    def is_editable(self) -> bool:
        return self.visibility is Visibility.EDITABLE

    def to_dict(self) -> Dict[str, Any]:
        """Representação serializável (formato de registro do documento)."""
        out: Dict[str, Any] = {
            "name": self.name,
            "type": self.value_type.value,
            "default": self.default,
            "visibility": self.visibility.value,
            "prompt": self.prompt,
            "tooltip": self.tooltip,
        }
        if self.format is not None:
            out["format"] = self.format
        if self.choices:
            out["choices"] = list(self.choices)
        if self.section is not None:
            out["section"] = self.section
        return out
