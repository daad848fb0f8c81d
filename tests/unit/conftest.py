import pytest

MASK64 = (1 << 64) - 1

def _s64(x: int) -> int:
    x &= MASK64
    return x - (1 << 64) if x >> 63 else x

class AsmMachine:
    """Intérprete mínimo del subconjunto x86-64 que emite el generador."""

    STACK_TOP = 0x10000
    SENTINEL = -1

    def __init__(self, text: str):
        self.code = []
        self.labels = {}
        for raw in text.splitlines():
            line = raw.strip()
            if not line:
                continue
            if line.endswith(":"):
                self.labels[line[:-1]] = len(self.code)
                continue
            if line.startswith("."):
                continue
            mnem, _, ops = line.partition(" ")
            self.code.append((mnem, [o.strip() for o in ops.split(",")] if ops else []))
        self.regs = {"rax": 0, "rdi": 0, "rdx": 0, "rbp": 0, "rsp": self.STACK_TOP}
        self.mem = {}
        self.flags = (0, 0)
        self.steps = 0
        self.exit_depth = None

    def _push(self, v):
        self.regs["rsp"] -= 8
        self.mem[self.regs["rsp"]] = _s64(v)

    def _pop(self):
        v = self.mem[self.regs["rsp"]]
        self.regs["rsp"] += 8
        return v

    def _val(self, op):
        if op in self.regs:
            return self.regs[op]
        if op.startswith("["):
            return self.mem[self.regs[op[1:-1]]]
        return _s64(int(op))

    def run(self, entry="main", max_steps=100000):
        self._push(self.SENTINEL)
        pc = self.labels[entry]
        while True:
            self.steps += 1
            assert self.steps < max_steps, "demasiados pasos"
            mnem, ops = self.code[pc]
            pc += 1
            r = self.regs
            if mnem == "push":
                self._push(self._val(ops[0]))
            elif mnem == "pop":
                r[ops[0]] = self._pop()
            elif mnem == "mov":
                if ops == ["rsp", "rbp"]:
                    self.exit_depth = r["rbp"] - r["rsp"]
                if ops[0].startswith("["):
                    self.mem[r[ops[0][1:-1]]] = self._val(ops[1])
                else:
                    r[ops[0]] = self._val(ops[1])
            elif mnem == "add":
                r[ops[0]] = _s64(r[ops[0]] + self._val(ops[1]))
            elif mnem == "sub":
                r[ops[0]] = _s64(r[ops[0]] - self._val(ops[1]))
            elif mnem == "imul":
                r[ops[0]] = _s64(r[ops[0]] * self._val(ops[1]))
            elif mnem == "cqo":
                r["rdx"] = -1 if r["rax"] < 0 else 0
            elif mnem == "idiv":
                a, b = r["rax"], self._val(ops[0])
                q = abs(a) // abs(b)
                r["rax"] = q if (a < 0) == (b < 0) else -q
                r["rdx"] = a - r["rax"] * b
            elif mnem == "cmp":
                self.flags = (self._val(ops[0]), self._val(ops[1]))
            elif mnem in ("sete", "setne", "setl", "setle"):
                a, b = self.flags
                bit = {"sete": a == b, "setne": a != b, "setl": a < b, "setle": a <= b}[mnem]
                r["rax"] = (r["rax"] & ~0xFF) | int(bit)
            elif mnem == "movzb":
                r["rax"] = r["rax"] & 0xFF
            elif mnem == "je":
                if self.flags[0] == self.flags[1]:
                    pc = self.labels[ops[0]]
            elif mnem == "jmp":
                pc = self.labels[ops[0]]
            elif mnem == "ret":
                assert self._pop() == self.SENTINEL, "pila desbalanceada al retornar"
                assert r["rsp"] == self.STACK_TOP
                return r["rax"]
            else:
                raise AssertionError(f"instrucción no soportada: {mnem}")

@pytest.fixture
def run_asm():
    def _run(text, entry="main"):
        return AsmMachine(text).run(entry)
    return _run

@pytest.fixture
def machine():
    return AsmMachine
