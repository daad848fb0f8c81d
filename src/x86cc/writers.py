from __future__ import annotations
from typing import Iterable, List

from .tokens import Token
from .ast import Num, LocalVar, BinOp, Assign, If, Return, Node

def to_token_lines(tokens: Iterable[Token]) -> List[str]:
    return [str(t) for t in tokens]

def to_tree_lines(node: Node, depth: int = 0) -> List[str]:
    """Volcado indentado de un árbol (dos espacios por nivel)."""
    pad = "  " * depth
    if isinstance(node, Num):
        return [f"{pad}Num {node.value}"]
    if isinstance(node, LocalVar):
        return [f"{pad}LocalVar {node.name}@{node.offset}"]
    if isinstance(node, BinOp):
        return [f"{pad}BinOp {node.op.value}"] + to_tree_lines(node.lhs, depth + 1) + to_tree_lines(node.rhs, depth + 1)
    if isinstance(node, Assign):
        return [f"{pad}Assign"] + to_tree_lines(node.target, depth + 1) + to_tree_lines(node.value, depth + 1)
    if isinstance(node, If):
        out = [f"{pad}If"] + to_tree_lines(node.cond, depth + 1) + to_tree_lines(node.then, depth + 1)
        if node.otherwise is not None:
            out += [f"{pad}Else"] + to_tree_lines(node.otherwise, depth + 1)
        return out
    if isinstance(node, Return):
        return [f"{pad}Return"] + to_tree_lines(node.value, depth + 1)
    return [f"{pad}<{type(node).__name__}>"]

def to_program_lines(stmts: Iterable[Node]) -> List[str]:
    out: List[str] = []
    for stmt in stmts:
        out.extend(to_tree_lines(stmt))
    return out

def write_asm(text: str, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
