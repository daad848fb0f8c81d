from __future__ import annotations
import argparse, logging, sys
from typing import List, Optional, Sequence, Tuple

from .lexer import split_lines, tokenize
from .parser import parse
from .codegen import generate
from .diagnostics import CompileError, Diagnostic, NestingTooDeep
from .writers import to_token_lines, to_program_lines, write_asm
from .utils import recursion_limit

logger = logging.getLogger(__name__)

# Profundidad de llamadas admitida (unos 12 marcos por nivel de paréntesis)
MAX_RECURSION = 5000

def compile_source(lines: Sequence[str], *, entry: str = "main") -> Tuple[Optional[str], Optional[CompileError]]:
    """Léxico, sintaxis y generación. Devuelve (ensamblador, None) o (None, error)."""
    try:
        with recursion_limit(MAX_RECURSION):
            return _compile(lines, entry)
    except RecursionError:
        logger.debug("recursión agotada con límite %d", MAX_RECURSION)
        return None, NestingTooDeep(limit=MAX_RECURSION)

def _compile(lines: Sequence[str], entry: str) -> Tuple[Optional[str], Optional[CompileError]]:
    lexed, err = tokenize(lines)
    if err is not None:
        return None, err
    tokens, symtab = lexed
    stmts, err = parse(tokens)
    if err is not None:
        return None, err
    return generate(stmts, symtab.frame_size, entry=entry)

def compile_text(text: str, *, filename: str | None = None,
                 entry: str = "main") -> Tuple[Optional[str], List[Diagnostic]]:
    """Compila un texto completo. Devuelve (ensamblador, diagnostics_totales)."""
    asm, err = compile_source(split_lines(text), entry=entry)
    if err is not None:
        logger.debug("compilación abortada en la etapa %s", err.stage)
        return None, [err.to_diagnostic(file=filename)]
    return asm, []

def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Compilador de un mini-lenguaje a ensamblador x86-64")
    ap.add_argument("source", help="archivo fuente de entrada ('-' para stdin)")
    ap.add_argument("-o", "--output", help="archivo de salida .s (por defecto stdout)")
    ap.add_argument("--entry", default="main", help="nombre de la rutina de entrada (por defecto main)")
    ap.add_argument("--dump-tokens", action="store_true", help="lista los tokens en stderr")
    ap.add_argument("--dump-ast", action="store_true", help="muestra el árbol sintáctico en stderr")
    ap.add_argument("-v", "--verbose", action="store_true", help="trazas de depuración")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        text = _read_source(args.source)
    except Exception as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    filename = "<stdin>" if args.source == "-" else args.source

    if args.dump_tokens or args.dump_ast:
        lexed, err = tokenize(split_lines(text))
        if err is None:
            tokens, _ = lexed
            if args.dump_tokens:
                for line in to_token_lines(tokens):
                    print(line, file=sys.stderr)
            if args.dump_ast:
                try:
                    with recursion_limit(MAX_RECURSION):
                        stmts, err = parse(tokens)
                        tree = to_program_lines(stmts) if err is None else []
                except RecursionError:
                    # compile_text informa el error
                    tree = []
                for line in tree:
                    print(line, file=sys.stderr)

    asm, diags = compile_text(text, filename=filename, entry=args.entry)
    for d in diags:
        print(d, file=sys.stderr)
    if asm is None:
        return 1

    if args.output is None:
        sys.stdout.write(asm)
        return 0

    try:
        write_asm(asm, args.output)
    except Exception as ex:
        print(f"ERROR al escribir salidas: {ex}", file=sys.stderr)
        return 3
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
