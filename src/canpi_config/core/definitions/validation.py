# src/canpi_config/core/definitions/validation.py
"""
Validação estrutural plugável do documento de definições.

Este módulo define o contrato `Validator` e suas duas implementações
canônicas, permitindo trocar o mecanismo de validação (estrutural ou
baseado em JSON Schema) sem tocar no loader nem no merge engine.

Formatos de documento aceitos:
    - lista de registros `{name, type, default, visibility, ...}`
    - mapa `name -> registro` (formato original do canpi, sem `name`)

Decisões arquiteturais:
    - Validadores nunca levantam exceção: retornam `ValidationResult`
    - Todos os problemas são coletados (não apenas o primeiro)
    - Cada problema identifica o item quando possível

Limites explícitos:
    - Não resolve defaults nem tokens de tipo/visibilidade
    - Não detecta nomes duplicados (responsabilidade do loader)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Protocol, Tuple

import jsonschema

from canpi_config.core.runtime.reader import KEY_PATTERN, is_valid_key


BUNDLED_SCHEMA_PATH = Path(__file__).with_name("definitions.schema.json")

_REQUIRED_FIELDS = ("type", "default", "visibility")
_OPTIONAL_STR_FIELDS = ("prompt", "tooltip", "format", "section")
_KNOWN_FIELDS = {"name", *_REQUIRED_FIELDS, *_OPTIONAL_STR_FIELDS, "choices"}


@dataclass(frozen=True)
class ValidationIssue:
    """Um problema estrutural encontrado no documento."""

    message: str
    item: Optional[str] = None
    path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "item": self.item, "path": self.path}


@dataclass
class ValidationResult:
    """Resultado de uma validação: aprovado ou lista de problemas."""

    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


class Validator(Protocol):
    """Contrato de um validador de documentos de definição."""

    def validate(self, document: Any) -> ValidationResult:
        ...


def iter_records(document: Any) -> Iterator[Tuple[str, Optional[str], Any]]:
    """Itera `(path, nome, registro)` para ambos os formatos de documento.

    No formato lista o nome vem do campo `name` (quando for string);
    no formato mapa o nome é a chave.
    """
    if isinstance(document, list):
        for i, record in enumerate(document):
            name = record.get("name") if isinstance(record, dict) else None
            yield f"[{i}]", name if isinstance(name, str) else None, record
    elif isinstance(document, dict):
        for key, record in document.items():
            yield f".{key}", key, record


class StructuralValidator:
    """Validador estrutural escrito à mão (sem dependências externas)."""

    def validate(self, document: Any) -> ValidationResult:
        result = ValidationResult()

        def _expect(cond: bool, msg: str, *, item: Optional[str] = None, path: str = "") -> bool:
            if not cond:
                result.issues.append(ValidationIssue(message=msg, item=item, path=path))
            return cond

        if not _expect(
            isinstance(document, (list, dict)),
            "definition document must be a list of records or a mapping of name -> record",
        ):
            return result

        list_shape = isinstance(document, list)
        for path, name, record in iter_records(document):
            label = name or path
            if not _expect(isinstance(record, dict), f"{label}: record must be a mapping", item=name, path=path):
                continue

            if list_shape:
                rname = record.get("name")
                _expect(
                    isinstance(rname, str) and is_valid_key(rname),
                    f"{label}: name is required and must match {KEY_PATTERN}",
                    item=name,
                    path=f"{path}.name",
                )
            else:
                _expect(
                    isinstance(name, str) and is_valid_key(name),
                    f"{path}: item name must match {KEY_PATTERN}",
                    item=name if isinstance(name, str) else None,
                    path=path,
                )
                _expect("name" not in record, f"{label}: name is given by the mapping key", item=name, path=path)

            for key in _REQUIRED_FIELDS:
                _expect(key in record, f"{label}: {key} is required", item=name, path=f"{path}.{key}")

            for key in sorted(set(record) - _KNOWN_FIELDS):
                _expect(False, f"{label}: unknown field '{key}'", item=name, path=f"{path}.{key}")

            for key in ("type", "visibility", *_OPTIONAL_STR_FIELDS):
                if key in record:
                    _expect(
                        isinstance(record[key], str),
                        f"{label}: {key} must be a string",
                        item=name,
                        path=f"{path}.{key}",
                    )

            section = record.get("section")
            if isinstance(section, str):
                _expect(
                    is_valid_key(section),
                    f"{label}: section must match {KEY_PATTERN}",
                    item=name,
                    path=f"{path}.section",
                )

            if "default" in record:
                _expect(
                    isinstance(record["default"], (str, int, bool)),
                    f"{label}: default must be a string, integer or boolean",
                    item=name,
                    path=f"{path}.default",
                )

            if "choices" in record:
                choices = record["choices"]
                _expect(
                    isinstance(choices, list) and all(isinstance(c, str) for c in choices),
                    f"{label}: choices must be a list of strings",
                    item=name,
                    path=f"{path}.choices",
                )

        return result


class JsonSchemaValidator:
    """Validador baseado em JSON Schema (Draft 2020-12).

    Por padrão usa o schema empacotado em `definitions.schema.json`.
    """

    def __init__(self, schema: Optional[Dict[str, Any]] = None) -> None:
        if schema is None:
            schema = json.loads(BUNDLED_SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.Draft202012Validator.check_schema(schema)
        self.schema = schema
        self._validator = jsonschema.Draft202012Validator(schema)

    @classmethod
    def from_file(cls, path: str | Path) -> "JsonSchemaValidator":
        return cls(json.loads(Path(path).read_text(encoding="utf-8")))

    def validate(self, document: Any) -> ValidationResult:
        result = ValidationResult()
        errors = [leaf for err in self._validator.iter_errors(document) for leaf in _leaf_errors(err)]
        errors.sort(key=lambda e: [str(p) for p in e.absolute_path])
        for err in errors:
            location = list(err.absolute_path)
            result.issues.append(
                ValidationIssue(
                    message=err.message,
                    item=_item_at(document, location),
                    path="".join(f"[{p}]" if isinstance(p, int) else f".{p}" for p in location),
                )
            )
        return result


def _leaf_errors(error: jsonschema.ValidationError) -> List[jsonschema.ValidationError]:
    # oneOf/anyOf agrupam os erros de cada ramo em `context`; ramos cujo
    # formato raiz não casa com a instância (erro de `type` no próprio nó)
    # são descartados para que o erro aponte para o item real.
    if not error.context:
        return [error]
    branches: Dict[Any, List[jsonschema.ValidationError]] = {}
    for sub in error.context:
        branches.setdefault(sub.relative_schema_path[0], []).append(sub)
    plausible = [
        subs
        for subs in branches.values()
        if not any(s.validator == "type" and not s.relative_path for s in subs)
    ] or list(branches.values())
    return [leaf for subs in plausible for sub in subs for leaf in _leaf_errors(sub)]


def _item_at(document: Any, location: List[Any]) -> Optional[str]:
    if not location:
        return None
    head = location[0]
    if isinstance(document, list) and isinstance(head, int) and head < len(document):
        record = document[head]
        name = record.get("name") if isinstance(record, dict) else None
        return name if isinstance(name, str) else None
    if isinstance(document, dict) and isinstance(head, str):
        return head
    return None
