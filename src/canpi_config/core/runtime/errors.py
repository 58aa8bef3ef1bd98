"""Erros canônicos do arquivo de runtime (key=value).

O arquivo de runtime é o estado persistido da última configuração salva.
Falhas de parsing são reportadas ao chamador, que decide se prossegue
apenas com defaults. O core nunca se recupera silenciosamente.
"""

from __future__ import annotations


class RuntimeFileError(Exception):
    """Erro base do domínio do arquivo de runtime."""


class ParseError(RuntimeFileError):
    """Linha malformada no arquivo de runtime.

    Atributos:
        line: número da linha (1-based).
        text: conteúdo bruto da linha.
    """

    def __init__(self, message: str, *, line: int, text: str = "") -> None:
        super().__init__(f"line {line}: {message}")
        self.line = line
        self.text = text
