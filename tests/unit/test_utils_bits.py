import sys
from src.x86cc.utils import u32, is_signed_nbit, align_up, recursion_limit

def test_u32_wraps():
    assert u32(-1) == 0xFFFFFFFF
    assert u32(0x1_0000_0005) == 5

def test_nbit_checks():
    assert is_signed_nbit(2**31 - 1, 32)
    assert is_signed_nbit(-2**31, 32)
    assert not is_signed_nbit(2**31, 32)

def test_align_up():
    assert align_up(0, 16) == 0
    assert align_up(8, 16) == 16
    assert align_up(208, 16) == 208
    assert align_up(24, 16) == 32

def test_recursion_limit_raises_and_restores():
    old = sys.getrecursionlimit()
    with recursion_limit(old + 500):
        assert sys.getrecursionlimit() == old + 500
    assert sys.getrecursionlimit() == old

def test_recursion_limit_never_lowers():
    old = sys.getrecursionlimit()
    with recursion_limit(10):
        assert sys.getrecursionlimit() == old
    assert sys.getrecursionlimit() == old
