'''
dataclases del árbol sintáctico (Num, LocalVar, BinOp, Assign, If, Return)
'''

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Union

from .tokens import TokenKind

# La posición solo sirve para diagnósticos: no participa en la igualdad

# ---- Hojas ----

@dataclass(frozen=True)
class Num:
    """Literal entero."""
    value: int
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

@dataclass(frozen=True)
class LocalVar:
    """Referencia a una variable local: nombre y desplazamiento desde rbp."""
    name: str
    offset: int
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

# ---- Operaciones ----

@dataclass(frozen=True)
class BinOp:
    """Operación binaria; op es ADD, SUB, MUL, DIV, EQ, NE, LT o LE."""
    op: TokenKind
    lhs: 'Node'
    rhs: 'Node'
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

@dataclass(frozen=True)
class Assign:
    """Asignación 'target = value'; como expresión vale 'value'."""
    target: 'Node'
    value: 'Node'
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

# ---- Sentencias ----

@dataclass(frozen=True)
class If:
    """if (cond) then [else otherwise]; otherwise es None si no hay else."""
    cond: 'Node'
    then: 'Node'
    otherwise: Optional['Node'] = None
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

@dataclass(frozen=True)
class Return:
    value: 'Node'
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

Node = Union[Num, LocalVar, BinOp, Assign, If, Return]
