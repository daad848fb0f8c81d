'''
aritmética de enteros (u32, rangos con signo, alineación) y límite de recursión
'''

from __future__ import annotations
import sys
from contextlib import contextmanager
from typing import Iterator

# Máscara para 32 bits sin signo
U32_MASK = 0xFFFFFFFF

def u32(x: int) -> int:
    """Fuerza el valor al rango de 32 bits sin signo."""
    return x & U32_MASK

def is_signed_nbit(x: int, n: int) -> bool:
    """Devuelve True si x está en [-(2^(n-1)), 2^(n-1)-1] (con signo de n bits)."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    lo = -(1 << (n - 1))
    hi = (1 << (n - 1)) - 1
    return lo <= x <= hi

def align_up(x: int, a: int) -> int:
    """Redondea x hacia arriba al múltiplo de a (potencia de 2)."""
    if a <= 0:
        raise ValueError("alignment must be positive")
    return (x + (a - 1)) & ~(a - 1)

@contextmanager
def recursion_limit(limit: int) -> Iterator[None]:
    """Sube el límite de recursión del intérprete mientras dura el bloque (nunca lo baja)."""
    old = sys.getrecursionlimit()
    sys.setrecursionlimit(max(old, limit))
    try:
        yield
    finally:
        sys.setrecursionlimit(old)
