"""Regras de coerção string <-> valor tipado por `ValueType`.

A coerção é um despacho fechado sobre `ValueType`: cada tipo possui sua
própria regra estrita de parsing e de formatação. Não existe inferência
de tipo nem "melhor esforço": strings ambíguas são falhas de coerção.

Regras (v1):
  - string  → qualquer texto sem quebra de linha
  - integer → `[+-]?[0-9]+`
  - boolean → exatamente `true` ou `false`
  - enum    → um dos valores de `choices` (case-sensitive)

Quando o item declara `format`, a forma canônica em string do valor deve
casar integralmente com a expressão regular. A checagem é feita sobre a
forma canônica para que serializar e recarregar produza o mesmo valor.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict

from canpi_config.core.definitions.item import ItemSchema, ValueType


_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_TRUE = "true"
_FALSE = "false"


class CoercionError(ValueError):
    """Valor bruto (ou tipado) incompatível com o tipo declarado do item."""

    def __init__(self, message: str, *, item: str, raw: Any) -> None:
        super().__init__(message)
        self.item = item
        self.raw = raw


def _fail(schema: ItemSchema, raw: Any, reason: str) -> CoercionError:
    return CoercionError(
        f"item '{schema.name}': {reason} (got {raw!r})",
        item=schema.name,
        raw=raw,
    )


# -----------------------------
# Parsers (str -> valor tipado)
# -----------------------------

def _parse_string(schema: ItemSchema, raw: str) -> str:
    if "\n" in raw or "\r" in raw:
        raise _fail(schema, raw, "string values cannot contain line breaks")
    return raw


def _parse_integer(schema: ItemSchema, raw: str) -> int:
    if not _INTEGER_RE.fullmatch(raw):
        raise _fail(schema, raw, "expected an integer")
    return int(raw)


def _parse_boolean(schema: ItemSchema, raw: str) -> bool:
    if raw == _TRUE:
        return True
    if raw == _FALSE:
        return False
    raise _fail(schema, raw, "expected 'true' or 'false'")


def _parse_enum(schema: ItemSchema, raw: str) -> str:
    if raw not in schema.choices:
        raise _fail(schema, raw, f"expected one of {list(schema.choices)}")
    return raw


_PARSERS: Dict[ValueType, Callable[[ItemSchema, str], Any]] = {
    ValueType.STRING: _parse_string,
    ValueType.INTEGER: _parse_integer,
    ValueType.BOOLEAN: _parse_boolean,
    ValueType.ENUM: _parse_enum,
}


# -----------------------------
# Checagem de tipo nativo
# -----------------------------

def _is_native(schema: ItemSchema, value: Any) -> bool:
    vt = schema.value_type
    if vt is ValueType.BOOLEAN:
        return isinstance(value, bool)
    if vt is ValueType.INTEGER:
        # bool é subclasse de int
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, str)


def _format_value(schema: ItemSchema, value: Any) -> str:
    if schema.value_type is ValueType.BOOLEAN:
        return _TRUE if value else _FALSE
    if schema.value_type is ValueType.INTEGER:
        return str(int(value))
    return str(value)


def _check_format(schema: ItemSchema, canonical: str) -> None:
    if schema.format is not None and re.fullmatch(schema.format, canonical) is None:
        raise _fail(schema, canonical, f"value does not match format {schema.format!r}")


# -----------------------------
# API
# -----------------------------

def coerce(schema: ItemSchema, raw: str) -> Any:
    """Converte a string persistida no valor tipado do item.

    Raises:
        CoercionError: se `raw` não obedecer à regra estrita do tipo ou ao `format`.
    """
    value = _PARSERS[schema.value_type](schema, raw)
    _check_format(schema, _format_value(schema, value))
    return value


def check_value(schema: ItemSchema, value: Any) -> None:
    """Valida um valor já tipado contra tipo, `choices` e `format` do item."""
    if not _is_native(schema, value):
        raise _fail(schema, value, f"expected a {schema.value_type.value} value")
    canonical = _format_value(schema, value)
    # reaplica o parser para garantir que a forma persistida volta ao mesmo valor
    _PARSERS[schema.value_type](schema, canonical)
    _check_format(schema, canonical)


def to_raw(schema: ItemSchema, value: Any) -> str:
    """Forma canônica em string de um valor tipado."""
    return _format_value(schema, value)


def normalize_default(schema: ItemSchema, value: Any) -> Any:
    """Resolve o default declarado no documento para o valor tipado.

    Aceita o tipo nativo ou, como nos documentos de definição originais do
    canpi (onde tudo é texto), uma string que passe pela coerção estrita.
    """
    if isinstance(value, str) and schema.value_type in (ValueType.INTEGER, ValueType.BOOLEAN):
        return coerce(schema, value)
    check_value(schema, value)
    return value
