import pytest

from fqgadget.types import ρ, Var, Witness
from fqgadget.circuit import Circuit


def solve(circuit, args):
    witness = Witness(circuit.funcs, args)
    witness.check(circuit.gates)
    return witness


def test_arithmetic():
    c = Circuit()
    x = c.PARAM("x")
    y = c.PARAM("y")
    s = c.ADD(x, y)
    d = c.SUB(x, y)
    m = c.MUL(x, y)
    q = c.SQR(x)
    r = c.DIV(x, y)
    w = solve(c, {"x": 7, "y": 3})
    assert w.apply(s) == 10
    assert w.apply(d) == 4
    assert w.apply(m) == 21
    assert w.apply(q) == 49
    assert w.apply(r) * 3 % ρ == 7


def test_linear_operations_add_no_gates():
    c = Circuit()
    x = c.PARAM("x")
    c.SUM([x, c.MUL(x, 5), c.DIV(x, 2), 9])
    assert c.gates == []


def test_constants_are_folded():
    c = Circuit()
    assert c.ADD(ρ - 1, 1) == 0
    assert c.SUB(0, 1) == ρ - 1
    assert c.MUL(2, 3) == 6
    assert c.DIV(1, 2) * 2 % ρ == 1
    assert c.SUM([1, 2, 3]) == 6
    assert c.wire_count == 1
    assert c.gates == []


def test_add_reduces_modulo_p():
    c = Circuit()
    x = c.PARAM("x")
    one = c.PARAM("one")
    c.ASSERT_EQZ(c.ADD(x, one))
    solve(c, {"x": ρ - 1, "one": 1})


def test_cancelling_variables_become_constants():
    c = Circuit()
    x = c.PARAM("x")
    assert c.SUB(x, x) == 0
    assert c.ADD(c.SUB(3, x), x) == 3


def test_assert_eq():
    c = Circuit()
    x = c.PARAM("x")
    y = c.PARAM("y")
    c.ASSERT_EQ(x, y, msg="x differs from y")
    solve(c, {"x": 5, "y": 5})
    with pytest.raises(AssertionError, match="x differs from y"):
        solve(c, {"x": 5, "y": 6})


def test_constant_constraint_fails_immediately():
    c = Circuit()
    with pytest.raises(AssertionError, match="constant mismatch"):
        c.ASSERT_EQ(1, 2, msg="constant mismatch")
    with pytest.raises(AssertionError):
        c.ASSERT_IS_BOOL(2)
    c.ASSERT_IS_BOOL(1)
    assert c.gates == []


def test_reveal():
    c = Circuit()
    x = c.PARAM("x")
    r = c.REVEAL("square", c.SQR(x))
    assert isinstance(r, Var)
    [index] = r.data
    assert c.stmts == {0: "ONE", index: "square"}
    w = solve(c, {"x": 12})
    assert w.apply(r) == 144


def test_division_by_zero_fails_in_witness():
    c = Circuit()
    x = c.PARAM("x")
    y = c.PARAM("y")
    c.DIV(x, y)
    with pytest.raises(ValueError):
        Witness(c.funcs, {"x": 1, "y": 0})
