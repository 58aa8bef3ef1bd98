# src/canpi_config/core/context.py
"""
Contexto de observabilidade de um ciclo de carga do canpi-config.

Este módulo define o `ConfigContext`, a estrutura canônica utilizada para
registrar, de forma explícita e estruturada, os eventos de um ciclo de
carga/merge/gravação da configuração.

O ConfigContext atua como o único meio de:
    - registro de logs estruturados (eventos)
    - coleta de warnings não fatais associados a itens

Princípios fundamentais:
    - Isolamento por ciclo (cada carga possui seu próprio contexto)
    - Injeção explícita (nenhum logger global ou singleton)
    - Eventos são dicionários serializáveis, não strings livres

Invariantes:
    - Todo evento inclui `session_id`, `scope`, `level` e `timestamp` UTC
    - Warnings são agrupados por nome de item
    - A ordem de `events` reflete a ordem de chamada

Limites explícitos:
    - Não persiste eventos automaticamente
    - Não decide políticas de recuperação
    - Não conhece tabela, definições ou arquivo de runtime
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class ConfigContext:
    """
    Contexto de observabilidade de um ciclo de carga da configuração.

    Decisões arquiteturais:
        - O contexto é passado explicitamente a `ConfigTable.build`,
          `load_configuration` e `save_configuration`
        - A ausência de contexto desabilita o registro de eventos
        - Warnings são sinais não fatais e não interrompem a carga
    """

    session_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def log(self, *, scope: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "session_id": self.session_id,
            "scope": scope,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, item: str, message: str) -> None:
        if item not in self.warnings:
            self.warnings[item] = []
        self.warnings[item].append(message)

    def events_in_scope(self, scope: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["scope"] == scope]
