# src/canpi_config/__init__.py
"""
canpi-config: configuração declarativa do servidor canpi.

Este pacote raiz define o namespace público do canpi-config, a biblioteca
que carrega o documento de definições de itens, o reconcilia com o arquivo
de runtime persistido e produz a tabela de configuração que é a fonte
única de verdade do servidor.

Princípios centrais:
    - Definições são declarativas e validadas antes de qualquer merge
    - Coerção de tipos é estrita; falhas viram diagnósticos, não palpites
    - Visibilidade (editable, view-only, hidden) é aplicada nos acessores
    - Tabelas e contextos são instâncias explícitas, nunca singletons

Limites explícitos:
    - Não é um sistema genérico de configuração
    - Não coordena múltiplos escritores do arquivo persistido
    - Não fornece CLI nem serviço
"""

from .core.configuration import load_configuration, save_configuration
from .core.context import ConfigContext
from .core.definitions import (
    DefinitionError,
    DefinitionFileNotFoundError,
    DefinitionParseError,
    DuplicateNameError,
    ItemSchema,
    JsonSchemaValidator,
    SchemaError,
    StructuralValidator,
    UnsupportedDefinitionFormatError,
    ValidationIssue,
    ValidationResult,
    Validator,
    ValueType,
    Visibility,
    compute_definitions_hash,
    load_definition_file,
    load_definitions,
    read_definition_file,
    schemas_with_visibility,
)
from .core.runtime import (
    ParseError,
    RawEntry,
    RuntimeFileError,
    parse_runtime_text,
    read_runtime_file,
    write_runtime_file,
    write_runtime_text,
)
from .core.table import (
    ConfigEntry,
    ConfigTable,
    ConfigTableError,
    Diagnostic,
    HiddenError,
    ItemTypeError,
    NotFoundError,
    ReadOnlyError,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigContext",
    "ConfigEntry",
    "ConfigTable",
    "ConfigTableError",
    "DefinitionError",
    "DefinitionFileNotFoundError",
    "DefinitionParseError",
    "Diagnostic",
    "DuplicateNameError",
    "HiddenError",
    "ItemSchema",
    "ItemTypeError",
    "JsonSchemaValidator",
    "NotFoundError",
    "ParseError",
    "RawEntry",
    "ReadOnlyError",
    "RuntimeFileError",
    "SchemaError",
    "StructuralValidator",
    "UnsupportedDefinitionFormatError",
    "ValidationIssue",
    "ValidationResult",
    "Validator",
    "ValueType",
    "Visibility",
    "compute_definitions_hash",
    "load_configuration",
    "load_definition_file",
    "load_definitions",
    "parse_runtime_text",
    "read_definition_file",
    "read_runtime_file",
    "save_configuration",
    "schemas_with_visibility",
    "write_runtime_file",
    "write_runtime_text",
]
