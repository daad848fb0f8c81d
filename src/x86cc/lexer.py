from __future__ import annotations
import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from .tokens import Token, TokenKind, KEYWORDS, TWO_CHAR_OPS, ONE_CHAR_OPS
from .diagnostics import CompileError, EmptySource, InvalidCharacter
from .utils import u32

logger = logging.getLogger(__name__)

IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
NUM_RE   = re.compile(r"[0-9]+")

# Cada variable ocupa 8 bytes en el marco de pila
SLOT_SIZE = 8

class SymbolTable:
    """Tabla plana nombre -> desplazamiento desde rbp (8, 16, 24, ...).

    Los desplazamientos se asignan en orden de aparición y no cambian nunca.
    """

    def __init__(self) -> None:
        self._offsets: Dict[str, int] = {}

    def intern(self, name: str) -> int:
        """Devuelve el desplazamiento de 'name', asignándolo si es nuevo."""
        off = self._offsets.get(name)
        if off is None:
            off = (len(self._offsets) + 1) * SLOT_SIZE
            self._offsets[name] = off
        return off

    @property
    def frame_size(self) -> int:
        """Bytes ocupados por todas las variables."""
        return len(self._offsets) * SLOT_SIZE

    def __len__(self) -> int:
        return len(self._offsets)

def is_ident_char(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ("0" <= ch <= "9")

def _keyword_at(line: str, col: int) -> Optional[Tuple[TokenKind, str]]:
    """Palabra reservada en 'col' solo si no sigue un carácter de identificador."""
    for word, kind in KEYWORDS.items():
        if line.startswith(word, col):
            nxt = col + len(word)
            if nxt >= len(line) or not is_ident_char(line[nxt]):
                return kind, word
    return None

def _number_value(digits: str) -> Tuple[int, bool]:
    """Devuelve (valor, desbordado). Sin control: se reduce a 32 bits sin signo."""
    value = 0
    wrapped = False
    for d in digits:
        full = value * 10 + (ord(d) - ord("0"))
        value = u32(full)
        wrapped = wrapped or value != full
    return value, wrapped

def tokenize_line(line: str, row: int, symtab: SymbolTable) -> Tuple[List[Token], Optional[CompileError]]:
    """Tokeniza una línea (row 1-based). Devuelve (tokens, error)."""
    tokens: List[Token] = []
    col = 0
    n = len(line)
    while col < n:
        ch = line[col]
        if ch.isspace():
            col += 1
            continue

        kw = _keyword_at(line, col)
        if kw:
            kind, word = kw
            tokens.append(Token(kind, row, col + 1, word))
            col += len(word)
            continue

        pair = line[col:col + 2]
        if pair in TWO_CHAR_OPS:
            tokens.append(Token(TWO_CHAR_OPS[pair], row, col + 1, pair))
            col += 2
            continue

        if ch in ONE_CHAR_OPS:
            tokens.append(Token(ONE_CHAR_OPS[ch], row, col + 1, ch))
            col += 1
            continue

        m = NUM_RE.match(line, col)
        if m:
            text = m.group(0)
            value, wrapped = _number_value(text)
            if wrapped:
                logger.warning("literal %s en %d:%d desborda 32 bits; se usa %d", text, row, col + 1, value)
            tokens.append(Token(TokenKind.NUM, row, col + 1, text, value=value))
            col = m.end()
            continue

        m = IDENT_RE.match(line, col)
        if m:
            name = m.group(0)
            offset = symtab.intern(name)
            tokens.append(Token(TokenKind.IDENT, row, col + 1, name, name=name, offset=offset))
            col = m.end()
            continue

        return tokens, InvalidCharacter(line=row, col=col + 1, char=ch)
    return tokens, None

def split_lines(text: str) -> List[str]:
    r"""Parte un texto solo por '\n' (quitando un '\r' final); otros saltos Unicode son espacio."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]

def tokenize(lines: Sequence[str]) -> Tuple[Optional[Tuple[List[Token], SymbolTable]], Optional[CompileError]]:
    r"""
    Devuelve ((tokens, symtab), None) o (None, error).

    Reglas:
      - Líneas y columnas 1-based. Cada elemento de 'lines' es una fila; un
        '\n' final se ignora y uno interior abre una fila nueva (columna 1).
      - 'if', 'else', 'return' solo si no les sigue letra, dígito o '_'.
      - '==', '!=', '<=', '>=' antes que los operadores de un carácter.
      - Cada identificador nuevo recibe el siguiente desplazamiento libre.
    """
    if len(lines) == 0:
        return None, EmptySource()

    symtab = SymbolTable()
    tokens: List[Token] = []
    row = 0
    for raw in lines:
        for line in split_lines(raw) or [""]:
            row += 1
            line_tokens, err = tokenize_line(line, row, symtab)
            if err is not None:
                return None, err
            tokens.extend(line_tokens)

    logger.debug("lexer: %d tokens, %d variables", len(tokens), len(symtab))
    return (tokens, symtab), None
