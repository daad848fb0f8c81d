'''
errores tipados de compilación (léxico, sintaxis, generación) y Diagnostic
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Literal, Union

from .tokens import TokenKind

# Severidad de los diagnósticos: solo errores (la compilación aborta en el primero)
Severity = Literal["error"]
Stage = Literal["lex", "parse", "codegen"]

_SEV_TO_LABEL = {
    "error": "ERROR",
}

@dataclass(frozen=True)
class Diagnostic:
    """Estructura de un diagnóstico para reportar problemas.

    Es la forma en que el driver muestra cualquier CompileError: severidad,
    mensaje, ubicación opcional (archivo, línea y columna) y una pista.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    col: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}"
            if self.col is not None:
                loc += f":{self.col}"
        if loc:
            loc += ": "
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.hint:
            core += f"  (pista: {self.hint})"
        return loc + core

def error(message: str, *, line: int | None = None, col: int | None = None,
          file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, col, hint, file)

# ---- Errores del analizador léxico ----

@dataclass(frozen=True)
class EmptySource:
    """La secuencia de líneas está vacía."""
    stage: Stage = "lex"

    def to_diagnostic(self, *, file: str | None = None) -> Diagnostic:
        return error("El código fuente está vacío", file=file)

@dataclass(frozen=True)
class InvalidCharacter:
    """Carácter que no corresponde a ningún token."""
    line: int
    col: int
    char: str
    stage: Stage = "lex"

    def to_diagnostic(self, *, file: str | None = None) -> Diagnostic:
        return error(f"Carácter inválido: {self.char!r}", line=self.line, col=self.col, file=file)

# ---- Errores del analizador sintáctico ----

@dataclass(frozen=True)
class Unexpected:
    """El siguiente token es de otra clase; la posición es justo tras el último token válido."""
    expected: TokenKind
    found: TokenKind
    line: int
    col: int
    stage: Stage = "parse"

    def to_diagnostic(self, *, file: str | None = None) -> Diagnostic:
        return error(f"se esperaba {self.expected.describe()}, se encontró {self.found.describe()}",
                     line=self.line, col=self.col, file=file)

@dataclass(frozen=True)
class Expected:
    """El flujo de tokens terminó antes de encontrar el token requerido."""
    expected: TokenKind
    line: int
    col: int
    stage: Stage = "parse"

    def to_diagnostic(self, *, file: str | None = None) -> Diagnostic:
        return error(f"se esperaba {self.expected.describe()} antes del fin del programa",
                     line=self.line, col=self.col, file=file)

@dataclass(frozen=True)
class InvalidAssignmentTarget:
    """El lado izquierdo de '=' no es una variable local."""
    line: int
    col: int
    stage: Stage = "parse"

    def to_diagnostic(self, *, file: str | None = None) -> Diagnostic:
        return error("Destino de asignación inválido", line=self.line, col=self.col, file=file,
                     hint="solo se puede asignar a una variable local")

@dataclass(frozen=True)
class NestingTooDeep:
    """El anidamiento de paréntesis o sentencias agota la pila del compilador."""
    limit: int
    stage: Stage = "parse"

    def to_diagnostic(self, *, file: str | None = None) -> Diagnostic:
        return error("Anidamiento demasiado profundo", file=file,
                     hint=f"el compilador admite hasta {self.limit} niveles de llamada")

# ---- Errores del generador ----

@dataclass(frozen=True)
class FormatFailure:
    """Invariante interno roto al emitir ensamblador (no debería ocurrir)."""
    detail: str
    stage: Stage = "codegen"

    def to_diagnostic(self, *, file: str | None = None) -> Diagnostic:
        return error(f"Fallo interno al generar ensamblador: {self.detail}", file=file)

CompileError = Union[EmptySource, InvalidCharacter, Unexpected, Expected,
                     InvalidAssignmentTarget, NestingTooDeep, FormatFailure]
