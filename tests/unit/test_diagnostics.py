from src.x86cc.diagnostics import error, EmptySource, InvalidCharacter, Unexpected, Expected, InvalidAssignmentTarget, NestingTooDeep
from src.x86cc.tokens import TokenKind

def test_error_str():
    d = error("carácter inválido", line=3, col=7, file="prog.c", hint="quite el '$'")
    s = str(d)
    assert "prog.c:3:7:" in s
    assert "ERROR: carácter inválido" in s
    assert "(pista: quite el '$')" in s

def test_error_kinds_to_diagnostic():
    assert EmptySource().stage == "lex"
    d = InvalidCharacter(line=1, col=4, char="$").to_diagnostic(file="x.c")
    assert str(d).startswith("x.c:1:4: ERROR:")
    d = Unexpected(TokenKind.SEMICOLON, TokenKind.NUM, line=2, col=9).to_diagnostic()
    assert "';'" in d.message and "un número" in d.message
    assert (d.line, d.col) == (2, 9)
    d = Expected(TokenKind.RPAREN, line=1, col=5).to_diagnostic()
    assert "')'" in d.message
    assert InvalidAssignmentTarget(line=1, col=3).stage == "parse"

def test_nesting_too_deep_has_no_position():
    d = NestingTooDeep(limit=5000).to_diagnostic(file="x.c")
    assert str(d).startswith("x.c: ERROR: Anidamiento demasiado profundo")
    assert "5000" in d.hint
