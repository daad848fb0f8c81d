# src/x86cc/parser.py
from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

from .tokens import Token, TokenKind
from .cursor import TokenStream
from .ast import Num, LocalVar, BinOp, Assign, If, Return, Node
from .diagnostics import CompileError

logger = logging.getLogger(__name__)

ParseResult = Tuple[Optional[Node], Optional[CompileError]]

# '>' y '>=' se normalizan a '<' y '<=' intercambiando operandos
_SWAPPED = {
    TokenKind.GT: TokenKind.LT,
    TokenKind.GE: TokenKind.LE,
}

def _match(ts: TokenStream, *kinds: TokenKind) -> Optional[Token]:
    """Consume y devuelve el siguiente token si es de alguna de las clases dadas."""
    tok = ts.peek()
    if tok is not None and tok.kind in kinds and ts.consume_if(tok.kind):
        return tok
    return None

def _binary_tier(ts: TokenStream, operand, kinds: Tuple[TokenKind, ...]) -> ParseResult:
    """Nivel binario asociativo a la izquierda: operand (op operand)*."""
    node, err = operand(ts)
    if err is not None:
        return None, err
    while True:
        op = _match(ts, *kinds)
        if op is None:
            return node, None
        rhs, err = operand(ts)
        if err is not None:
            return None, err
        if op.kind in _SWAPPED:
            node = BinOp(_SWAPPED[op.kind], rhs, node, line=op.line, col=op.col)
        else:
            node = BinOp(op.kind, node, rhs, line=op.line, col=op.col)

def primary(ts: TokenStream) -> ParseResult:
    """primary := "(" expr ")" | variable | número"""
    if ts.consume_if(TokenKind.LPAREN):
        node, err = expr(ts)
        if err is not None:
            return None, err
        _, err = ts.expect(TokenKind.RPAREN)
        if err is not None:
            return None, err
        return node, None

    tok = ts.peek()
    if tok is not None and tok.kind is TokenKind.IDENT:
        var, err = ts.expect_local_variable()
        if err is not None:
            return None, err
        name, offset = var
        return LocalVar(name, offset, line=tok.line, col=tok.col), None

    value, err = ts.expect_number()
    if err is not None:
        return None, err
    return Num(value, line=tok.line, col=tok.col), None

def unary(ts: TokenStream) -> ParseResult:
    """-x se traduce a 0 - x; +x es x."""
    if ts.consume_if(TokenKind.ADD):
        return primary(ts)
    op = _match(ts, TokenKind.SUB)
    if op is not None:
        node, err = primary(ts)
        if err is not None:
            return None, err
        return BinOp(TokenKind.SUB, Num(0, line=op.line, col=op.col), node, line=op.line, col=op.col), None
    return primary(ts)

def multiplicative(ts: TokenStream) -> ParseResult:
    return _binary_tier(ts, unary, (TokenKind.MUL, TokenKind.DIV))

def additive(ts: TokenStream) -> ParseResult:
    return _binary_tier(ts, multiplicative, (TokenKind.ADD, TokenKind.SUB))

def relational(ts: TokenStream) -> ParseResult:
    return _binary_tier(ts, additive, (TokenKind.LT, TokenKind.LE, TokenKind.GT, TokenKind.GE))

def equality(ts: TokenStream) -> ParseResult:
    return _binary_tier(ts, relational, (TokenKind.EQ, TokenKind.NE))

def assign(ts: TokenStream) -> ParseResult:
    """assign := equality ("=" assign)?  (asociativa a la derecha)"""
    node, err = equality(ts)
    if err is not None:
        return None, err
    op = _match(ts, TokenKind.ASSIGN)
    if op is None:
        return node, None
    value, err = assign(ts)
    if err is not None:
        return None, err
    # El destino se valida en el generador (gen_lval)
    return Assign(node, value, line=op.line, col=op.col), None

def expr(ts: TokenStream) -> ParseResult:
    return assign(ts)

def statement(ts: TokenStream) -> ParseResult:
    kw = _match(ts, TokenKind.IF, TokenKind.RETURN)

    if kw is not None and kw.kind is TokenKind.IF:
        _, err = ts.expect(TokenKind.LPAREN)
        if err is not None:
            return None, err
        cond, err = expr(ts)
        if err is not None:
            return None, err
        _, err = ts.expect(TokenKind.RPAREN)
        if err is not None:
            return None, err
        then, err = statement(ts)
        if err is not None:
            return None, err
        otherwise = None
        if ts.consume_if(TokenKind.ELSE):
            otherwise, err = statement(ts)
            if err is not None:
                return None, err
        return If(cond, then, otherwise, line=kw.line, col=kw.col), None

    node, err = expr(ts)
    if err is not None:
        return None, err
    _, err = ts.expect(TokenKind.SEMICOLON)
    if err is not None:
        return None, err
    if kw is not None:
        return Return(node, line=kw.line, col=kw.col), None
    return node, None

def program(ts: TokenStream) -> Tuple[Optional[List[Node]], Optional[CompileError]]:
    stmts: List[Node] = []
    while not ts.is_empty():
        node, err = statement(ts)
        if err is not None:
            return None, err
        stmts.append(node)
    return stmts, None

def parse(tokens: Sequence[Token]) -> Tuple[Optional[List[Node]], Optional[CompileError]]:
    """
    Devuelve (sentencias, None) o (None, error). El primer error aborta todo.

    Gramática (de menor a mayor precedencia):
      statement      := "if" "(" expr ")" statement ("else" statement)?
                      | "return" expr ";" | expr ";"
      assign         := equality ("=" assign)?
      equality       := relational (("==" | "!=") relational)*
      relational     := additive (("<" | "<=" | ">" | ">=") additive)*
      additive       := multiplicative (("+" | "-") multiplicative)*
      multiplicative := unary (("*" | "/") unary)*
      unary          := ("+" | "-")? primary
      primary        := "(" expr ")" | variable | número
    """
    stmts, err = program(TokenStream(tokens))
    if err is not None:
        return None, err
    logger.debug("parser: %d sentencias", len(stmts))
    return stmts, None
