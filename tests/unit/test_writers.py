from src.x86cc.lexer import tokenize
from src.x86cc.parser import parse
from src.x86cc.writers import to_token_lines, to_program_lines

def test_token_and_tree_dumps():
    (tokens, _), _ = tokenize(["a = -1;", "if (a) return 2; else 3;"])
    assert to_token_lines(tokens)[:3] == ["1:1 IDENT a@8", "1:3 ASSIGN =", "1:5 SUB -"]
    stmts, err = parse(tokens)
    assert err is None
    assert to_program_lines(stmts) == [
        "Assign",
        "  LocalVar a@8",
        "  BinOp -",
        "    Num 0",
        "    Num 1",
        "If",
        "  LocalVar a@8",
        "  Return",
        "    Num 2",
        "Else",
        "  Num 3",
    ]
