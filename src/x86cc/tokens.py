'''
clases de token (TokenKind) y Token posicionado
'''

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

class TokenKind(Enum):
    # aritméticos
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    # comparación
    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    # paréntesis y puntuación
    LPAREN = "("
    RPAREN = ")"
    SEMICOLON = ";"
    ASSIGN = "="
    # palabras reservadas
    IF = "if"
    ELSE = "else"
    RETURN = "return"
    # con carga útil
    NUM = "<número>"
    IDENT = "<variable>"

    def describe(self) -> str:
        """Nombre legible para mensajes de error."""
        if self is TokenKind.NUM:
            return "un número"
        if self is TokenKind.IDENT:
            return "una variable local"
        return f"'{self.value}'"

KEYWORDS = {
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}

# Operadores de dos caracteres antes que los de uno (prefijos comunes)
TWO_CHAR_OPS = {
    "==": TokenKind.EQ,
    "!=": TokenKind.NE,
    "<=": TokenKind.LE,
    ">=": TokenKind.GE,
}

ONE_CHAR_OPS = {
    "+": TokenKind.ADD,
    "-": TokenKind.SUB,
    "*": TokenKind.MUL,
    "/": TokenKind.DIV,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ";": TokenKind.SEMICOLON,
    "=": TokenKind.ASSIGN,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
}

@dataclass(frozen=True)
class Token:
    """Token con posición 1-based (línea, columna) y texto original.

    - value: valor del literal (solo NUM)
    - name/offset: nombre y desplazamiento en el marco (solo IDENT)
    """
    kind: TokenKind
    line: int
    col: int
    text: str
    value: Optional[int] = None
    name: Optional[str] = None
    offset: Optional[int] = None

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def end_col(self) -> int:
        """Columna justo después del último carácter del token."""
        return self.col + self.length

    def __str__(self) -> str:
        if self.kind is TokenKind.NUM:
            payload = f" {self.value}"
        elif self.kind is TokenKind.IDENT:
            payload = f" {self.name}@{self.offset}"
        else:
            payload = f" {self.kind.value}"
        return f"{self.line}:{self.col} {self.kind.name}{payload}"
