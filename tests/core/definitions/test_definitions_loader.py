# tests/core/definitions/test_definitions_loader.py
"""
Testes do loader de definições (load_definitions / read_definition_file).

Este módulo valida o comportamento do loader responsável por:
- materializar registros em `ItemSchema`
- rejeitar documentos malformados antes de qualquer merge
- detectar nomes duplicados
- ler arquivos JSON/YAML

Os testes asseguram que:
- ambos os formatos de documento (lista e mapa) são aceitos
- defaults textuais são convertidos de forma estrita
- erros identificam o item problemático
- nenhum resultado parcial é produzido em caso de erro

Limites explícitos:
    - Não valida o merge com o arquivo de runtime
    - Não valida o JSON Schema empacotado (ver test_definitions_validation)
"""

import json
from pathlib import Path

import pytest

try:
    from canpi_config.core.definitions.errors import (
        DefinitionFileNotFoundError,
        DefinitionParseError,
        DuplicateNameError,
        SchemaError,
        UnsupportedDefinitionFormatError,
    )
    from canpi_config.core.definitions.item import ValueType, Visibility
    from canpi_config.core.definitions.loader import (
        load_definition_file,
        load_definitions,
        read_definition_file,
        schemas_with_visibility,
    )
except Exception as e:  # noqa: BLE001
    load_definitions = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o loader de definições e suas exceções tipadas estejam disponíveis.

    Falha imediatamente, com mensagem explícita, quando o módulo `loader`
    ou as exceções canônicas de `errors` não podem ser importados.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing definitions loader/errors modules. Implement:\n"
            "- src/canpi_config/core/definitions/loader.py (load_definitions)\n"
            "- src/canpi_config/core/definitions/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_load_mapping_document(canpi_definitions):
    """
    Verifica a materialização do formato mapa (formato original do canpi).

    Invariantes:
        - A ordem dos itens segue a ordem do documento
        - Defaults textuais de itens integer/boolean viram valores nativos
        - Metadados de apresentação são preservados
    """
    _require_imports()
    schemas = load_definitions(canpi_definitions)

    assert [s.name for s in schemas] == list(canpi_definitions)
    by_name = {s.name: s for s in schemas}

    canid = by_name["canid"]
    assert canid.value_type is ValueType.INTEGER
    assert canid.default == 100
    assert canid.visibility is Visibility.VIEW_ONLY
    assert canid.prompt == "CAN Id"
    assert canid.format == "[0-9]{1,4}"

    assert by_name["edserver"].default is True
    assert by_name["logging"].choices == ("DEBUG", "INFO", "WARN")
    assert by_name["router_ssid"].section == "network"
    assert by_name["node_mode"].is_hidden


def test_load_list_document(canpi_definitions_list, canpi_definitions):
    _require_imports()
    from_list = load_definitions(canpi_definitions_list)
    from_mapping = load_definitions(canpi_definitions)
    assert from_list == from_mapping


def test_duplicate_name_in_list_raises():
    """
    Verifica que nomes duplicados são erro de carga.

    Invariantes:
        - A exceção é específica (`DuplicateNameError`) e nomeia o item
        - `DuplicateNameError` é um `SchemaError`
    """
    _require_imports()
    doc = [
        {"name": "port", "type": "integer", "default": 8080, "visibility": "editable"},
        {"name": "port", "type": "integer", "default": 9090, "visibility": "editable"},
    ]
    with pytest.raises(DuplicateNameError) as exc:
        load_definitions(doc)
    assert exc.value.item == "port"
    assert isinstance(exc.value, SchemaError)


@pytest.mark.parametrize(
    "record, fragment",
    [
        ({"type": "float", "default": 1, "visibility": "editable"}, "type"),
        ({"type": "integer", "default": 1, "visibility": "public"}, "visibility"),
        ({"type": "integer", "default": "abc", "visibility": "editable"}, "default"),
        ({"type": "integer", "default": True, "visibility": "editable"}, "default"),
        ({"type": "boolean", "default": "yes", "visibility": "editable"}, "default"),
        ({"type": "enum", "default": "A", "visibility": "editable"}, "choices"),
        ({"type": "enum", "default": "C", "choices": ["A", "B"], "visibility": "editable"}, "default"),
        ({"type": "string", "default": "x", "choices": ["x"], "visibility": "editable"}, "choices"),
        ({"type": "integer", "default": 12345, "format": "[0-9]{1,4}", "visibility": "editable"}, "format"),
        ({"type": "string", "default": "x", "format": "[", "visibility": "editable"}, "format"),
    ],
)
def test_invalid_record_raises_schema_error_naming_item(record, fragment):
    _require_imports()
    with pytest.raises(SchemaError) as exc:
        load_definitions({"bad_item": record})
    assert exc.value.item == "bad_item"
    assert fragment in str(exc.value)


def test_missing_field_is_rejected_before_materialization():
    _require_imports()
    with pytest.raises(SchemaError) as exc:
        load_definitions([{"name": "port", "type": "integer", "visibility": "editable"}])
    assert exc.value.item == "port"
    assert exc.value.issues


def test_invalid_root_type_raises():
    _require_imports()
    with pytest.raises(SchemaError):
        load_definitions("not a document")


def test_custom_validator_is_used():
    """Um validador plugado que reprova o documento interrompe a carga."""
    _require_imports()
    from canpi_config.core.definitions.validation import ValidationIssue, ValidationResult

    class RejectAll:
        def validate(self, document):
            return ValidationResult(issues=[ValidationIssue(message="rejected", item="port")])

    doc = [{"name": "port", "type": "integer", "default": 8080, "visibility": "editable"}]
    with pytest.raises(SchemaError) as exc:
        load_definitions(doc, validator=RejectAll())
    assert exc.value.item == "port"
    assert "rejected" in str(exc.value)


class _AcceptAll:
    def validate(self, document):
        from canpi_config.core.definitions.validation import ValidationResult

        return ValidationResult()


@pytest.mark.parametrize("validator", [None, _AcceptAll()])
@pytest.mark.parametrize("name", ["log level", " port", "port ", "a=b", "[net]", "café"])
def test_names_outside_runtime_key_grammar_are_rejected(validator, name):
    """
    Verifica que nomes de itens seguem a gramática de chaves do arquivo de runtime.

    Invariantes:
        - Um nome que o leitor de runtime não aceitaria nunca é materializado
        - A regra vale mesmo com um validador plugado permissivo
    """
    _require_imports()
    record = {"type": "integer", "default": 1, "visibility": "editable"}
    with pytest.raises(SchemaError) as exc:
        load_definitions({name: record}, validator=validator)
    assert exc.value.item == name


@pytest.mark.parametrize("validator", [None, _AcceptAll()])
@pytest.mark.parametrize("section", ["ap mode", "", " ", "net]"])
def test_sections_outside_runtime_key_grammar_are_rejected(validator, section):
    _require_imports()
    record = {"type": "string", "default": "canpi", "visibility": "editable", "section": section}
    with pytest.raises(SchemaError) as exc:
        load_definitions({"ap_ssid": record}, validator=validator)
    assert exc.value.item == "ap_ssid"
    assert "section" in str(exc.value)


def test_dotted_and_dashed_names_are_accepted():
    _require_imports()
    doc = {
        "net.router-ssid": {"type": "string", "default": "", "visibility": "editable", "section": "wifi.2g"},
    }
    (item,) = load_definitions(doc)
    assert item.name == "net.router-ssid"
    assert item.section == "wifi.2g"


def test_schemas_with_visibility(canpi_schemas):
    _require_imports()
    hidden = schemas_with_visibility(canpi_schemas, Visibility.HIDDEN)
    view_only = schemas_with_visibility(canpi_schemas, Visibility.VIEW_ONLY)
    editable = schemas_with_visibility(canpi_schemas, Visibility.EDITABLE)

    assert [s.name for s in hidden] == ["node_mode"]
    assert [s.name for s in view_only] == ["canid", "node_number"]
    assert len(editable) == len(canpi_schemas) - 3


# -----------------------------
# Leitura de arquivos
# -----------------------------

def test_read_json_file(tmp_path: Path, canpi_definitions):
    _require_imports()
    p = tmp_path / "canpi-config-defn.json"
    p.write_text(json.dumps(canpi_definitions), encoding="utf-8")

    schemas = load_definition_file(p)
    assert len(schemas) == len(canpi_definitions)


def test_read_yaml_file(tmp_path: Path):
    _require_imports()
    p = tmp_path / "defn.yaml"
    p.write_text(
        """
- name: port
  type: integer
  default: 8080
  visibility: editable
- name: debug
  type: boolean
  default: false
  visibility: hidden
""".lstrip(),
        encoding="utf-8",
    )

    schemas = load_definition_file(p)
    assert [s.name for s in schemas] == ["port", "debug"]
    assert schemas[1].default is False


def test_duplicate_top_level_json_key_raises_duplicate_name(tmp_path: Path):
    _require_imports()
    p = tmp_path / "defn.json"
    p.write_text(
        '{"port": {"type": "integer", "default": 1, "visibility": "editable"},'
        ' "port": {"type": "integer", "default": 2, "visibility": "editable"}}',
        encoding="utf-8",
    )
    with pytest.raises(DuplicateNameError) as exc:
        load_definition_file(p)
    assert exc.value.item == "port"


def test_duplicate_nested_json_key_is_parse_error(tmp_path: Path):
    _require_imports()
    p = tmp_path / "defn.json"
    p.write_text(
        '[{"name": "port", "type": "integer", "type": "string", "default": 1, "visibility": "editable"}]',
        encoding="utf-8",
    )
    with pytest.raises(DefinitionParseError):
        read_definition_file(p)


def test_missing_file_raises(tmp_path: Path):
    _require_imports()
    with pytest.raises(DefinitionFileNotFoundError):
        read_definition_file(tmp_path / "missing.json")


def test_unsupported_format_raises(tmp_path: Path):
    _require_imports()
    p = tmp_path / "defn.toml"
    p.write_text("x = 1", encoding="utf-8")
    with pytest.raises(UnsupportedDefinitionFormatError):
        read_definition_file(p)


@pytest.mark.parametrize("content", ["{not json", ""])
def test_malformed_json_raises_parse_error(tmp_path: Path, content):
    _require_imports()
    p = tmp_path / "defn.json"
    p.write_text(content, encoding="utf-8")
    with pytest.raises(DefinitionParseError):
        read_definition_file(p)


def test_empty_yaml_raises_parse_error(tmp_path: Path):
    _require_imports()
    p = tmp_path / "defn.yml"
    p.write_text("", encoding="utf-8")
    with pytest.raises(DefinitionParseError):
        read_definition_file(p)
