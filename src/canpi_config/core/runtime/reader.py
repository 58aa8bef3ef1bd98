# src/canpi_config/core/runtime/reader.py
"""
Leitor canônico do arquivo de runtime do canpi (formato key=value).

O arquivo de runtime é orientado a linhas, no estilo INI usado pelo
canpi em campo:

    # comentário
    canid=101
    node_number = 5432
    [network]
    router_ssid = "home"

Regras de parsing (v1):
    - linhas em branco e comentários (`#` ou `;`) são ignorados
    - espaços ao redor da chave e do valor são removidos
    - o valor é tudo após o primeiro `=`
    - valores entre aspas (duplas ou simples) são desempacotados
    - cabeçalhos `[secao]` são aceitos e as chaves são achatadas
    - uma chave atribuída duas vezes é erro
    - chaves e seções seguem a gramática `KEY_PATTERN`
    - apenas LF, CRLF e CR terminam uma linha

Invariantes:
    - O resultado é sempre um mapa plano nome -> string
    - Erros identificam a linha (1-based)

Limites explícitos:
    - Não conhece tipos nem definições de itens
    - Não preserva comentários
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional

from .errors import ParseError


KEY_PATTERN = r"[A-Za-z0-9_.\-]+"

_KEY_RE = re.compile(KEY_PATTERN)
_SECTION_RE = re.compile(r"\[\s*(" + KEY_PATTERN + r")\s*\]")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_COMMENT_PREFIXES = ("#", ";")
_QUOTES = ('"', "'")


@dataclass(frozen=True)
class RawEntry:
    """Par (nome, valor) lido do arquivo de runtime, sem tipo."""

    name: str
    value: str
    line: int = 0
    section: Optional[str] = None


def is_valid_key(text: str) -> bool:
    """Indica se `text` é aceito como chave (ou seção) pelo leitor."""
    return _KEY_RE.fullmatch(text) is not None


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def iter_raw_entries(text: str) -> Iterator[RawEntry]:
    """Itera as atribuições do texto na ordem em que aparecem.

    Raises:
        ParseError: linha sem formato key=value, chave inválida,
            cabeçalho de seção malformado ou chave repetida.
    """
    section: Optional[str] = None
    seen: Dict[str, int] = {}

    # separadores Unicode de `str.splitlines` (\x0b, \u2028, ...) pertencem ao valor
    for lineno, line in enumerate(_LINE_BREAK_RE.split(text), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(_COMMENT_PREFIXES):
            continue

        if stripped.startswith("["):
            m = _SECTION_RE.fullmatch(stripped)
            if m is None:
                raise ParseError("malformed section header", line=lineno, text=line)
            section = m.group(1)
            continue

        key, sep, value = stripped.partition("=")
        if not sep:
            raise ParseError("expected key=value", line=lineno, text=line)

        key = key.strip()
        if not key:
            raise ParseError("empty key", line=lineno, text=line)
        if not is_valid_key(key):
            raise ParseError(f"invalid key {key!r}", line=lineno, text=line)
        if key in seen:
            raise ParseError(
                f"duplicate key {key!r} (first assigned on line {seen[key]})",
                line=lineno,
                text=line,
            )
        seen[key] = lineno

        yield RawEntry(name=key, value=_unquote(value.strip()), line=lineno, section=section)


def parse_runtime_text(text: str) -> Dict[str, str]:
    """Parseia o texto do arquivo de runtime em um mapa plano nome -> valor."""
    return {e.name: e.value for e in iter_raw_entries(text)}


def read_runtime_file(path: str | Path) -> Optional[Dict[str, str]]:
    """Lê o arquivo de runtime.

    Returns:
        Mapa nome -> valor, ou `None` quando o arquivo não existe
        (inicialização apenas com defaults).

    Raises:
        ParseError: se o arquivo existir e estiver malformado.
    """
    p = Path(path)
    if not p.exists():
        return None
    return parse_runtime_text(p.read_text(encoding="utf-8"))
