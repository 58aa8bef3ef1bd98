"""Hashing canônico do conjunto de definições.

O hash identifica qual conjunto de definições originou uma tabela de
configuração (rastreabilidade no Event Log do `ConfigContext`).

Decisão: o hash é calculado a partir de JSON canônico (sort_keys, separators)
da lista de registros, preservando a ordem dos itens.
"""

from __future__ import annotations

import hashlib
import json
from typing import Iterable

from .item import ItemSchema


def compute_definitions_hash(schemas: Iterable[ItemSchema]) -> str:
    """Computa SHA-256 das definições em formato canônico."""
    records = [s.to_dict() for s in schemas]
    canonical = json.dumps(records, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
