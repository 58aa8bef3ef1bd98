"""canpi-config: Definitions (core).

Componentes canônicos do documento de definições de itens:
 - modelo de item (ItemSchema, ValueType, Visibility)
 - validação estrutural plugável (estrutural / JSON Schema)
 - leitura (JSON/YAML) e materialização
 - hashing canônico (rastreabilidade)
"""

from .errors import (  # noqa: F401
    DefinitionError,
    DefinitionFileNotFoundError,
    DefinitionParseError,
    DuplicateNameError,
    SchemaError,
    UnsupportedDefinitionFormatError,
)

from .hashing import compute_definitions_hash  # noqa: F401
from .item import ItemSchema, ValueType, Visibility  # noqa: F401
from .loader import (  # noqa: F401
    load_definition_file,
    load_definitions,
    read_definition_file,
    schemas_with_visibility,
)
from .validation import (  # noqa: F401
    JsonSchemaValidator,
    StructuralValidator,
    ValidationIssue,
    ValidationResult,
    Validator,
)
