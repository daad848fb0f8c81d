# src/x86cc/codegen.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .ast import Num, LocalVar, BinOp, Assign, If, Return, Node
from .isa import spec as isa_spec, prologue, epilogue, RAX, RDI, RBP
from .diagnostics import CompileError, FormatFailure, InvalidAssignmentTarget
from .utils import align_up, is_signed_nbit

logger = logging.getLogger(__name__)

# El marco se alinea a 16 bytes (ABI System V)
FRAME_ALIGN = 16

@dataclass(frozen=True)
class Labels:
    """Par de etiquetas de un condicional."""
    otherwise: str
    end: str

class CodeGenerator:
    """Generador de máquina de pila: cada expresión deja exactamente un valor en la pila."""

    def __init__(self) -> None:
        self.lines: List[str] = []
        self._label_seq = 0

    # ---------- Emisión ----------

    def emit(self, instr: str) -> None:
        self.lines.append(f"  {instr}")

    def emit_label(self, name: str) -> None:
        self.lines.append(f"{name}:")

    def new_labels(self) -> Labels:
        """Etiquetas únicas para un 'if' (contador monótono por programa)."""
        n = self._label_seq
        self._label_seq += 1
        return Labels(otherwise=f".Lelse.{n}", end=f".Lend.{n}")

    @property
    def label_count(self) -> int:
        return self._label_seq

    def text(self) -> str:
        return "\n".join(self.lines) + "\n"

    # ---------- Nodos ----------

    def gen_lval(self, node: Node) -> Optional[CompileError]:
        """Empuja la dirección rbp - offset de una variable local."""
        if not isinstance(node, LocalVar):
            return InvalidAssignmentTarget(line=node.line, col=node.col)
        self.emit(f"mov {RAX}, {RBP}")
        self.emit(f"sub {RAX}, {node.offset}")
        self.emit(f"push {RAX}")
        return None

    def gen(self, node: Node) -> Optional[CompileError]:
        if isinstance(node, Num):
            if is_signed_nbit(node.value, 32):
                self.emit(f"push {node.value}")
            else:
                # push solo admite inmediatos de 32 bits con signo
                self.emit(f"mov {RAX}, {node.value}")
                self.emit(f"push {RAX}")
            return None

        if isinstance(node, LocalVar):
            err = self.gen_lval(node)
            if err is not None:
                return err
            self.emit(f"pop {RAX}")
            self.emit(f"mov {RAX}, [{RAX}]")
            self.emit(f"push {RAX}")
            return None

        if isinstance(node, Assign):
            err = self.gen_lval(node.target)
            if err is not None:
                return err
            err = self.gen(node.value)
            if err is not None:
                return err
            self.emit(f"pop {RDI}")
            self.emit(f"pop {RAX}")
            self.emit(f"mov [{RAX}], {RDI}")
            self.emit(f"push {RDI}")
            return None

        if isinstance(node, If):
            return self._gen_if(node)

        if isinstance(node, Return):
            err = self.gen(node.value)
            if err is not None:
                return err
            self.emit(f"pop {RAX}")
            self.lines.extend(epilogue())
            return None

        if isinstance(node, BinOp):
            return self._gen_binop(node)

        return FormatFailure(f"nodo desconocido: {type(node).__name__}")

    def _gen_binop(self, node: BinOp) -> Optional[CompileError]:
        """
        Las cadenas asociativas a izquierda (1 + 2 + ... + n) se recorren en
        bucle por la rama izquierda; solo los operandos derechos recursan.
        """
        chain: List[BinOp] = []
        cur: Node = node
        while isinstance(cur, BinOp):
            chain.append(cur)
            cur = cur.lhs
        err = self.gen(cur)
        if err is not None:
            return err
        for binop in reversed(chain):
            try:
                op = isa_spec(binop.op)
            except KeyError as ex:
                return FormatFailure(str(ex))
            err = self.gen(binop.rhs)
            if err is not None:
                return err
            self.emit(f"pop {RDI}")
            self.emit(f"pop {RAX}")
            for instr in op.body:
                self.emit(instr)
            self.emit(f"push {RAX}")
        return None

    def _gen_if(self, node: If) -> Optional[CompileError]:
        """
        Ambas ramas dejan un valor en la pila: la rama tomada, o la condición
        (0) cuando es falsa y no hay else.
        """
        labels = self.new_labels()
        err = self.gen(node.cond)
        if err is not None:
            return err
        self.emit(f"pop {RAX}")
        self.emit(f"cmp {RAX}, 0")
        self.emit(f"je {labels.otherwise}")
        err = self.gen(node.then)
        if err is not None:
            return err
        self.emit(f"jmp {labels.end}")
        self.emit_label(labels.otherwise)
        if node.otherwise is not None:
            err = self.gen(node.otherwise)
            if err is not None:
                return err
        else:
            self.emit(f"push {RAX}")
        self.emit_label(labels.end)
        return None

    # ---------- Programa ----------

    def generate_program(self, stmts: Sequence[Node], locals_bytes: int, *,
                         entry: str = "main") -> Tuple[Optional[str], Optional[CompileError]]:
        """Prólogo, cada sentencia seguida de 'pop rax', epílogo y ret.

        'locals_bytes' es lo que ocupan las variables (SymbolTable.frame_size);
        el marco reservado se redondea a FRAME_ALIGN.
        """
        frame_size = align_up(locals_bytes, FRAME_ALIGN)
        self.lines.extend(prologue(entry, frame_size))
        for stmt in stmts:
            err = self.gen(stmt)
            if err is not None:
                return None, err
            self.emit(f"pop {RAX}")
        self.lines.extend(epilogue())
        logger.debug("codegen: %d líneas, %d etiquetas, marco de %d bytes",
                     len(self.lines), self.label_count, frame_size)
        return self.text(), None

def generate(stmts: Sequence[Node], locals_bytes: int, *, entry: str = "main") -> Tuple[Optional[str], Optional[CompileError]]:
    return CodeGenerator().generate_program(stmts, locals_bytes, entry=entry)
