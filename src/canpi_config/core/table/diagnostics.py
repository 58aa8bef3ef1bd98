"""
Diagnósticos não fatais produzidos durante o merge.

Diagnósticos são artefatos estruturados e serializáveis, no mesmo
espírito dos payloads de erro canônicos: um código estável, o item
envolvido, o valor bruto e uma mensagem curta e humana.

Catálogo (v1):
    - COERCION_FAILED    → valor persistido não convertível; default aplicado
    - UNRECOGNIZED_ENTRY → chave persistida sem definição; não incorporada
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


COERCION_FAILED = "COERCION_FAILED"
UNRECOGNIZED_ENTRY = "UNRECOGNIZED_ENTRY"


@dataclass(frozen=True)
class Diagnostic:
    """Registro de um problema não fatal associado a um item."""

    code: str
    item: str
    message: str
    raw_value: Optional[str] = None
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def coercion_failed(
    *,
    item: str,
    raw_value: str,
    reason: str,
    hint: str = "Corrija o valor no arquivo de runtime ou salve a configuração para regravar o default.",
) -> Diagnostic:
    return Diagnostic(
        code=COERCION_FAILED,
        item=item,
        message=f"invalid persisted value, default applied: {reason}",
        raw_value=raw_value,
        hint=hint,
    )


def unrecognized_entry(
    *,
    item: str,
    raw_value: str,
    hint: str = "Remova a chave do arquivo de runtime ou declare o item no documento de definições.",
) -> Diagnostic:
    return Diagnostic(
        code=UNRECOGNIZED_ENTRY,
        item=item,
        message="persisted key has no definition and was not incorporated",
        raw_value=raw_value,
        hint=hint,
    )
