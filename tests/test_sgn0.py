import random

import pytest
from py_ecc.optimized_bls12_381 import FQ2

from fqgadget import native
from fqgadget.types import ρ, Witness
from fqgadget.gadgets import Gadgets


def sgn0_circuit():
    c = Gadgets()
    return c, c.SGN0(c.PARAM_FQ2("x"))


def sgn0(re, im):
    c, s = sgn0_circuit()
    w = Witness(c.funcs, {"x.re": re, "x.im": im})
    w.check(c.gates)
    return w.apply(s)


def is_zero(value):
    c = Gadgets()
    z = c.IS_ZERO(c.PARAM("x"))
    w = Witness(c.funcs, {"x": value})
    w.check(c.gates)
    return w.apply(z)


@pytest.mark.parametrize("re, im, expected", [
    (1, 0, 1),
    (0, 0, 0),
    (0, 1, 1),
    (0, 2, 0),
    (2, 0, 0),
    (2, 1, 0),
    (2, ρ - 2, 0),
    (3, 2, 1),
    (ρ - 1, 1, 0),
    (ρ - 2, 0, 1),
])
def test_standard_vectors(re, im, expected):
    assert sgn0(re, im) == expected
    assert native.sgn0(FQ2([re, im])) == expected


def test_matches_native():
    rng = random.Random(9)
    c, s = sgn0_circuit()
    for _ in range(4):
        re = rng.choice([0, rng.randrange(ρ)])
        im = rng.randrange(ρ)
        w = Witness(c.funcs, {"x.re": re, "x.im": im})
        w.check(c.gates)
        assert w.apply(s) == native.sgn0(FQ2([re, im]))


def test_constant():
    c = Gadgets()
    assert c.SGN0((0, 3)) == 1
    assert c.SGN0((4, 3)) == 0
    assert c.gates == []


def test_param_names():
    c = Gadgets()
    re, im = c.PARAM_FQ2("x", public=True)
    assert sorted(c.stmts.values()) == ["ONE", "x.im", "x.re"]


@pytest.mark.parametrize("value, expected", [(0, 1), (1, 0), (2, 0), (ρ - 1, 0)])
def test_is_zero(value, expected):
    assert is_zero(value) == expected


def test_is_zero_constant():
    c = Gadgets()
    assert c.IS_ZERO(0) == 1
    assert c.IS_ZERO(7) == 0


def test_is_zero_rejects_wrong_inverse():
    c = Gadgets()
    z = c.IS_ZERO(c.PARAM("x"))
    # the entry right after the parameter is the claimed inverse
    c.funcs[2] = (None, lambda getw, args: 5)
    with pytest.raises(AssertionError, match="zero test error"):
        Witness(c.funcs, {"x": 3}).check(c.gates)
    w = Witness(c.funcs, {"x": 0})
    w.check(c.gates)
    assert w.apply(z) == 1


def test_deterministic():
    results = []
    for _ in range(2):
        c, s = sgn0_circuit()
        w = Witness(c.funcs, {"x.re": 0, "x.im": ρ - 4})
        w.check(c.gates)
        results.append((c.wire_count, len(c.gates), w.vec))
    assert results[0] == results[1]
