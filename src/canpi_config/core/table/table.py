# src/canpi_config/core/table/table.py
"""
Tabela de configuração: merge engine do canpi-config.

Este módulo define a `ConfigTable`, a fonte única de verdade da
configuração em memória, construída a partir do conjunto de definições
(`ItemSchema`) e dos valores brutos lidos do arquivo de runtime.

Política de merge (v1), para cada item na ordem das definições:
    - valor persistido presente e convertível → valor convertido
    - valor persistido presente e não convertível → default + diagnóstico
    - valor persistido ausente → default
    - chaves persistidas sem definição → lista `unrecognized` + diagnóstico,
      nunca promovidas a itens da tabela

Política de acesso:
    - `get`         → chamadores confiáveis, ignora visibilidade
    - `get_visible` → chamadores externos, recusa itens `hidden`
    - `set`         → apenas itens `editable`, valor estritamente tipado

Invariantes:
    - Todo item da tabela possui um `ItemSchema`
    - Todo valor atual é convertível para string e de volta sem perda
    - A tabela nunca muta um `ItemSchema`
    - Erros de acessores são locais à chamada

Limites explícitos:
    - Não lê nem grava arquivos
    - Não é thread-safe (acesso concorrente deve ser serializado externamente)
    - Não mantém estado global: cada instância é independente
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from canpi_config.core.context import ConfigContext
from canpi_config.core.definitions.errors import DuplicateNameError
from canpi_config.core.definitions.hashing import compute_definitions_hash
from canpi_config.core.definitions.item import ItemSchema, Visibility
from canpi_config.core.runtime.reader import RawEntry

from .coercion import CoercionError, check_value, coerce, to_raw
from .diagnostics import COERCION_FAILED, Diagnostic, coercion_failed, unrecognized_entry
from .errors import HiddenError, ItemTypeError, NotFoundError, ReadOnlyError


@dataclass(frozen=True)
class ConfigEntry:
    """Visão de um item: metadados + valor atual."""

    schema: ItemSchema
    value: Any

    @property
    def name(self) -> str:
        return self.schema.name

    def to_dict(self) -> Dict[str, Any]:
        out = self.schema.to_dict()
        out["current"] = self.value
        return out


class ConfigTable:
    """
    Tabela autoritativa de valores tipados, indexada por nome de item.

    Uma tabela recém-criada via construtor contém apenas defaults;
    `ConfigTable.build` aplica o merge com os valores persistidos.
    """

    def __init__(self, schemas: Iterable[ItemSchema], *, context: Optional[ConfigContext] = None) -> None:
        self._schemas: Dict[str, ItemSchema] = {}
        for s in schemas:
            if s.name in self._schemas:
                raise DuplicateNameError(s.name)
            self._schemas[s.name] = s

        self._values: Dict[str, Any] = {name: s.default for name, s in self._schemas.items()}
        self.diagnostics: List[Diagnostic] = []
        self.unrecognized: List[RawEntry] = []
        self.context = context
        self.definitions_hash = compute_definitions_hash(self._schemas.values())

    # -----------------------------
    # Construção (merge)
    # -----------------------------
    @classmethod
    def build(
        cls,
        schemas: Iterable[ItemSchema],
        raw_values: Optional[Mapping[str, str]],
        *,
        context: Optional[ConfigContext] = None,
    ) -> "ConfigTable":
        """Constrói a tabela aplicando os valores persistidos sobre os defaults.

        Args:
            schemas: definições dos itens (ordem preservada).
            raw_values: mapa nome -> string do arquivo de runtime, ou `None`
                quando o arquivo não existe.
            context: contexto opcional para registro de eventos.

        Raises:
            DuplicateNameError: se `schemas` repetir um nome.
        """
        table = cls(schemas, context=context)
        raw = dict(raw_values or {})

        for name, s in table._schemas.items():
            if name not in raw:
                continue
            raw_value = raw[name]
            try:
                if not isinstance(raw_value, str):
                    raise CoercionError(
                        f"item '{name}': persisted value must be a string (got {raw_value!r})",
                        item=name,
                        raw=raw_value,
                    )
                table._values[name] = coerce(s, raw_value)
            except CoercionError as e:
                table._record(coercion_failed(item=name, raw_value=str(raw_value), reason=str(e)))

        for name, raw_value in raw.items():
            if name in table._schemas:
                continue
            table.unrecognized.append(RawEntry(name=name, value=str(raw_value)))
            table._record(unrecognized_entry(item=name, raw_value=str(raw_value)))

        table._log(
            scope="table",
            level="INFO",
            message="table.built",
            items=len(table._schemas),
            persisted=len(raw),
            coercion_failures=sum(1 for d in table.diagnostics if d.code == COERCION_FAILED),
            unrecognized=len(table.unrecognized),
            definitions_hash=table.definitions_hash,
        )
        return table

    # -----------------------------
    # Acessores
    # -----------------------------
    def schema(self, name: str) -> ItemSchema:
        try:
            return self._schemas[name]
        except KeyError:
            raise NotFoundError(name) from None

    def get(self, name: str) -> Any:
        """Valor atual do item, independente da visibilidade (uso interno)."""
        self.schema(name)
        return self._values[name]

    def get_visible(self, name: str) -> Any:
        """Valor atual do item para chamadores externos (ex.: UI).

        Raises:
            NotFoundError: item inexistente.
            HiddenError: item com visibilidade `hidden`.
        """
        if self.schema(name).is_hidden:
            raise HiddenError(name)
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        """Altera o valor atual de um item editável.

        Raises:
            NotFoundError: item inexistente.
            ReadOnlyError: item `view-only` ou `hidden`.
            ItemTypeError: valor incompatível com tipo, opções ou formato.
        """
        s = self.schema(name)
        if not s.is_editable:
            self._log(scope=name, level="WARNING", message="item.update_rejected", reason=s.visibility.value)
            raise ReadOnlyError(name, s.visibility.value)
        try:
            check_value(s, value)
        except CoercionError as e:
            self._log(scope=name, level="WARNING", message="item.update_rejected", reason=str(e))
            raise ItemTypeError(str(e), item=name) from e

        previous = self._values[name]
        self._values[name] = value
        self._log(scope=name, level="INFO", message="item.updated", previous=previous, current=value)

    def entry(self, name: str) -> ConfigEntry:
        return ConfigEntry(schema=self.schema(name), value=self._values[name])

    def visible_entries(self) -> List[ConfigEntry]:
        """Itens `editable` e `view-only`, na ordem das definições."""
        return [self.entry(name) for name, s in self._schemas.items() if not s.is_hidden]

    def items_with_visibility(self, visibility: Visibility) -> List[ConfigEntry]:
        return [self.entry(name) for name, s in self._schemas.items() if s.visibility is visibility]

    def names(self) -> List[str]:
        return list(self._schemas)

    def values(self) -> Dict[str, Any]:
        """Snapshot dos valores atuais (uso interno/confiável)."""
        return dict(self._values)

    # -----------------------------
    # Exportação
    # -----------------------------
    def to_raw_mapping(self) -> Dict[str, str]:
        """Achata a tabela em nome -> string, na ordem das definições."""
        return {name: to_raw(s, self._values[name]) for name, s in self._schemas.items()}

    def sections(self) -> Dict[str, str]:
        """Seção INI de cada item que declara uma."""
        return {name: s.section for name, s in self._schemas.items() if s.section is not None}

    # -----------------------------
    # Protocolos
    # -----------------------------
    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __repr__(self) -> str:
        return f"ConfigTable(items={len(self._schemas)}, diagnostics={len(self.diagnostics)})"

    # -----------------------------
    # Internos
    # -----------------------------
    def _record(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self.context is not None:
            self.context.add_warning(item=diagnostic.item, message=diagnostic.message)
        self._log(
            scope=diagnostic.item,
            level="WARNING",
            message=diagnostic.code,
            raw_value=diagnostic.raw_value,
        )

    def _log(self, *, scope: str, level: str, message: str, **extra: Any) -> None:
        if self.context is not None:
            self.context.log(scope=scope, level=level, message=message, **extra)
