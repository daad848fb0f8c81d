'''
tabla de operaciones x86-64 (sintaxis Intel, GNU as) que emite el generador
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple

from .tokens import TokenKind

# Registros usados por la máquina de pila
RAX = "rax"    # acumulador / operando izquierdo / resultado
RDI = "rdi"    # operando derecho
RBP = "rbp"    # base del marco
RSP = "rsp"    # cima de la pila
AL  = "al"     # byte bajo de rax (resultado de setcc)

SYNTAX_DIRECTIVE = ".intel_syntax noprefix"

@dataclass(frozen=True)
class OpSpec:
    """Instrucciones tras 'pop rdi; pop rax'; el resultado queda en rax."""
    body: Tuple[str, ...]

SPEC: Dict[TokenKind, OpSpec] = {}

def _add(op: TokenKind, body: Tuple[str, ...]):
    SPEC[op] = OpSpec(body)

def _cmp(setcc: str) -> Tuple[str, ...]:
    return (f"cmp {RAX}, {RDI}", f"{setcc} {AL}", f"movzb {RAX}, {AL}")

# Aritmética (cociente con signo truncado: cqo extiende rax a rdx:rax)
_add(TokenKind.ADD, (f"add {RAX}, {RDI}",))
_add(TokenKind.SUB, (f"sub {RAX}, {RDI}",))
_add(TokenKind.MUL, (f"imul {RAX}, {RDI}",))
_add(TokenKind.DIV, ("cqo", f"idiv {RDI}"))

# Comparaciones: resultado 0 o 1. GT/GE se normalizan en el parser.
_add(TokenKind.EQ, _cmp("sete"))
_add(TokenKind.NE, _cmp("setne"))
_add(TokenKind.LT, _cmp("setl"))
_add(TokenKind.LE, _cmp("setle"))

def spec(op: TokenKind) -> OpSpec:
    """Devuelve la especificación de un operador binario."""
    if op not in SPEC:
        raise KeyError(f"Operador sin traducción: {op.name}")
    return SPEC[op]

def prologue(entry: str, frame_size: int) -> Tuple[str, ...]:
    return (
        SYNTAX_DIRECTIVE,
        f".globl {entry}",
        f"{entry}:",
        f"  push {RBP}",
        f"  mov {RBP}, {RSP}",
        f"  sub {RSP}, {frame_size}",
    )

def epilogue() -> Tuple[str, ...]:
    return (
        f"  mov {RSP}, {RBP}",
        f"  pop {RBP}",
        "  ret",
    )
