# src/canpi_config/core/definitions/loader.py
"""
Loader canônico do documento de definições de itens.

Este módulo é responsável por ler, validar estruturalmente e materializar
o documento declarativo que descreve todos os itens de configuração
conhecidos pelo canpi.

Fluxo de carregamento:
    1. leitura do arquivo (JSON ou YAML), opcional
    2. validação estrutural plugável (`Validator`)
    3. materialização de cada registro em `ItemSchema`

Princípios fundamentais:
    - Erros de autoria são detectados antes de qualquer merge
    - Nenhuma heurística implícita é aplicada a tipos ou defaults
    - Nenhum resultado parcial é produzido em caso de erro

Invariantes:
    - Nomes de itens são únicos no conjunto retornado
    - Nomes e seções seguem a gramática de chaves do arquivo de runtime
    - O default de cada item é do tipo nativo declarado
    - A ordem dos itens segue a ordem do documento

Limites explícitos:
    - Não lê o arquivo de runtime
    - Não constrói a tabela de configuração
    - Não mantém estado global
"""

from __future__ import annotations

import json
import re
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import yaml  # PyYAML

from canpi_config.core.runtime.reader import KEY_PATTERN, is_valid_key
from canpi_config.core.table.coercion import CoercionError, normalize_default

from .errors import (
    DefinitionFileNotFoundError,
    DefinitionParseError,
    DuplicateNameError,
    SchemaError,
    UnsupportedDefinitionFormatError,
)
from .item import ItemSchema, ValueType, Visibility
from .validation import StructuralValidator, Validator, iter_records


class _PairsDict(dict):
    """dict que registra chaves repetidas encontradas pelo parser JSON."""

    duplicate_keys: Tuple[str, ...] = ()


def _track_duplicate_keys(pairs: Sequence[Tuple[str, Any]]) -> _PairsDict:
    out = _PairsDict()
    dups: List[str] = []
    for key, value in pairs:
        if key in out:
            dups.append(key)
        out[key] = value
    out.duplicate_keys = tuple(dups)
    return out


def _reject_nested_duplicates(node: Any, *, top_level: bool) -> None:
    if isinstance(node, dict):
        dups = getattr(node, "duplicate_keys", ())
        if dups and not top_level:
            raise DefinitionParseError(f"duplicate key in definition record: {dups[0]}")
        for value in node.values():
            _reject_nested_duplicates(value, top_level=False)
    elif isinstance(node, list):
        for value in node:
            _reject_nested_duplicates(value, top_level=False)


def read_definition_file(path: str | Path) -> Any:
    """Lê o arquivo de definições (JSON/YAML) sem validá-lo.

    Chaves duplicadas no nível raiz de um documento JSON em formato mapa
    são preservadas em `duplicate_keys` para que `load_definitions`
    reporte `DuplicateNameError`.

    Raises:
        DefinitionFileNotFoundError: se o arquivo não existir.
        UnsupportedDefinitionFormatError: se a extensão não for suportada.
        DefinitionParseError: se o parsing falhar ou o arquivo estiver vazio.
    """
    p = Path(path)
    if not p.exists():
        raise DefinitionFileNotFoundError(f"definition file not found: {p}")

    suffix = p.suffix.lower()
    raw = p.read_text(encoding="utf-8")

    try:
        if suffix == ".json":
            data = json.loads(raw, object_pairs_hook=_track_duplicate_keys)
        elif suffix in {".yml", ".yaml"}:
            data = yaml.safe_load(raw)
        else:
            raise UnsupportedDefinitionFormatError(f"unsupported definition format: {suffix}")
    except UnsupportedDefinitionFormatError:
        raise
    except (ValueError, yaml.YAMLError) as e:
        raise DefinitionParseError(str(e) or "failed to parse definition file") from e

    if data is None:
        # YAML vazio -> None
        raise DefinitionParseError("definition file is empty")

    _reject_nested_duplicates(data, top_level=True)
    return data


def _build_item(name: str, record: Dict[str, Any]) -> ItemSchema:
    def _expect(cond: bool, msg: str) -> None:
        if not cond:
            raise SchemaError(f"item '{name}': {msg}", item=name)

    try:
        value_type = ValueType(record.get("type"))
    except ValueError:
        raise SchemaError(
            f"item '{name}': type must be one of {[t.value for t in ValueType]}",
            item=name,
        ) from None

    try:
        visibility = Visibility(record.get("visibility"))
    except ValueError:
        raise SchemaError(
            f"item '{name}': visibility must be one of {[v.value for v in Visibility]}",
            item=name,
        ) from None

    _expect("default" in record, "default is required")

    choices = record.get("choices") or []
    if value_type is ValueType.ENUM:
        _expect(isinstance(choices, list) and bool(choices), "enum items require a non-empty choices list")
        _expect(all(isinstance(c, str) for c in choices), "choices must be strings")
        _expect(len(set(choices)) == len(choices), "choices must be unique")
    else:
        _expect(not choices, f"choices are only allowed for enum items, not {value_type.value}")

    fmt = record.get("format")
    if fmt is not None:
        _expect(isinstance(fmt, str), "format must be a string")
        try:
            re.compile(fmt)
        except re.error as e:
            raise SchemaError(f"item '{name}': invalid format regex: {e}", item=name) from e

    section = record.get("section")
    _expect(
        section is None or (isinstance(section, str) and is_valid_key(section)),
        f"section must match {KEY_PATTERN} (got {section!r})",
    )

    item = ItemSchema(
        name=name,
        value_type=value_type,
        default=record["default"],
        visibility=visibility,
        prompt=str(record.get("prompt") or ""),
        tooltip=str(record.get("tooltip") or ""),
        format=fmt,
        choices=tuple(choices),
        section=section,
    )

    try:
        default = normalize_default(item, record["default"])
    except CoercionError as e:
        raise SchemaError(f"item '{name}': invalid default: {e}", item=name) from e

    return replace(item, default=default)


def load_definitions(document: Any, *, validator: Optional[Validator] = None) -> List[ItemSchema]:
    """Valida e materializa o documento de definições em `ItemSchema`.

    Args:
        document: documento já parseado (lista de registros ou mapa nome -> registro).
        validator: validador estrutural; `StructuralValidator` quando omitido.

    Returns:
        Lista de `ItemSchema` na ordem do documento.

    Raises:
        SchemaError: documento malformado ou registro inválido.
        DuplicateNameError: dois itens com o mesmo nome.
    """
    result = (validator or StructuralValidator()).validate(document)
    if not result.ok:
        first = result.issues[0]
        more = f" (+{len(result.issues) - 1} more)" if len(result.issues) > 1 else ""
        raise SchemaError(
            f"invalid definition document: {first.message}{more}",
            item=first.item,
            issues=result.issues,
        )

    if not isinstance(document, (list, dict)):
        raise SchemaError("definition document must be a list of records or a mapping of name -> record")

    dups = getattr(document, "duplicate_keys", ())
    if dups:
        raise DuplicateNameError(dups[0])

    seen: set[str] = set()
    items: List[ItemSchema] = []
    for path, name, record in iter_records(document):
        if not isinstance(name, str) or not is_valid_key(name):
            raise SchemaError(
                f"{path}: item name must match {KEY_PATTERN} (got {name!r})",
                item=name if isinstance(name, str) else None,
            )
        if not isinstance(record, dict):
            raise SchemaError(f"item '{name}': record must be a mapping", item=name)
        if name in seen:
            raise DuplicateNameError(name)
        seen.add(name)
        items.append(_build_item(name, record))

    return items


def load_definition_file(path: str | Path, *, validator: Optional[Validator] = None) -> List[ItemSchema]:
    """Lê e materializa um arquivo de definições."""
    return load_definitions(read_definition_file(path), validator=validator)


def schemas_with_visibility(schemas: Iterable[ItemSchema], visibility: Visibility) -> List[ItemSchema]:
    """Filtra os itens por classe de visibilidade, preservando a ordem."""
    return [s for s in schemas if s.visibility is visibility]
