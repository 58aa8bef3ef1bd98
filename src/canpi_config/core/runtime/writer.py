"""Writer canônico do arquivo de runtime (key=value).

Serialização determinística:
  - chaves sem seção primeiro, na ordem do mapa
  - depois um bloco `[secao]` por seção, na ordem da primeira aparição
  - uma atribuição `key=value` por linha, sem comentários
  - valores que o leitor alteraria (espaços nas bordas, aspas nas bordas)
    são escritos entre aspas duplas

O writer nunca produz um texto que o leitor rejeite: chaves e seções
fora da gramática `KEY_PATTERN` e valores com quebra de linha são
recusados com `ValueError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional

from .reader import KEY_PATTERN, _QUOTES, is_valid_key


def _needs_quotes(value: str) -> bool:
    if value != value.strip():
        return True
    return len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES


def _line(key: str, value: str) -> str:
    if not is_valid_key(key):
        raise ValueError(f"key {key!r} does not match {KEY_PATTERN}")
    if "\n" in value or "\r" in value:
        raise ValueError(f"value for {key!r} cannot contain line breaks")
    if _needs_quotes(value):
        value = f'"{value}"'
    return f"{key}={value}"


def write_runtime_text(
    mapping: Mapping[str, str],
    *,
    sections: Optional[Mapping[str, str]] = None,
) -> str:
    """Serializa o mapa nome -> valor no formato do arquivo de runtime."""
    sections = sections or {}
    general: List[str] = []
    grouped: Dict[str, List[str]] = {}

    for key, value in mapping.items():
        section = sections.get(key)
        line = _line(key, value)
        if section is None:
            general.append(line)
        else:
            if not is_valid_key(section):
                raise ValueError(f"section {section!r} of {key!r} does not match {KEY_PATTERN}")
            grouped.setdefault(section, []).append(line)

    lines = list(general)
    for section, body in grouped.items():
        if lines:
            lines.append("")
        lines.append(f"[{section}]")
        lines.extend(body)

    return "\n".join(lines) + "\n" if lines else ""


def write_runtime_file(
    path: str | Path,
    mapping: Mapping[str, str],
    *,
    sections: Optional[Mapping[str, str]] = None,
) -> str:
    """Persiste o mapa no arquivo de runtime (UTF-8) e retorna o texto gravado."""
    text = write_runtime_text(mapping, sections=sections)
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return text
