from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

from .tokens import Token, TokenKind
from .diagnostics import CompileError, Expected, Unexpected

class TokenStream:
    """Vista con un token de anticipación sobre la secuencia del lexer.

    Los métodos expect* devuelven (carga, None) o (None, error); un token
    que no coincide nunca se consume.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens: List[Token] = list(tokens)
        self._pos = 0
        self._last: Optional[Token] = None

    def peek(self) -> Optional[Token]:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def is_empty(self) -> bool:
        return self._pos >= len(self._tokens)

    def consume_if(self, kind: TokenKind) -> bool:
        """Consume el siguiente token si su clase es 'kind' (sin mirar la carga)."""
        tok = self.peek()
        if tok is None or tok.kind is not kind:
            return False
        self._advance()
        return True

    def stop_position(self) -> Tuple[int, int]:
        """Punto justo después del último token consumido (línea, columna)."""
        if self._last is not None:
            return self._last.line, self._last.end_col
        if self._tokens:
            first = self._tokens[0]
            return first.line, first.col
        return 1, 1

    def expect(self, kind: TokenKind) -> Tuple[Optional[Token], Optional[CompileError]]:
        tok = self.peek()
        if tok is None:
            line, col = self.stop_position()
            return None, Expected(expected=kind, line=line, col=col)
        if tok.kind is not kind:
            line, col = self.stop_position()
            return None, Unexpected(expected=kind, found=tok.kind, line=line, col=col)
        self._advance()
        return tok, None

    def expect_number(self) -> Tuple[Optional[int], Optional[CompileError]]:
        tok, err = self.expect(TokenKind.NUM)
        if err is not None:
            return None, err
        return tok.value, None

    def expect_local_variable(self) -> Tuple[Optional[Tuple[str, int]], Optional[CompileError]]:
        tok, err = self.expect(TokenKind.IDENT)
        if err is not None:
            return None, err
        return (tok.name, tok.offset), None

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        self._last = tok
        return tok

    def __len__(self) -> int:
        return len(self._tokens) - self._pos
