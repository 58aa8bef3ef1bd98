"""canpi-config: Config table (core).

Merge engine e fonte única de verdade da configuração:
 - coerção estrita string <-> valor tipado
 - diagnósticos não fatais (coerção, chaves desconhecidas)
 - acessores com regras de visibilidade
"""

from .coercion import CoercionError, check_value, coerce, to_raw  # noqa: F401
from .diagnostics import COERCION_FAILED, UNRECOGNIZED_ENTRY, Diagnostic  # noqa: F401
from .errors import (  # noqa: F401
    ConfigTableError,
    HiddenError,
    ItemTypeError,
    NotFoundError,
    ReadOnlyError,
)
from .table import ConfigEntry, ConfigTable  # noqa: F401
