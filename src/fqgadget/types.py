from dataclasses import dataclass, field
from typing import Callable, Iterable

from py_ecc.optimized_bls12_381 import field_modulus as ρ


Fld = int


@dataclass
class Var:
    # An assigned element of the base field is a linear combination of the entries in the witness
    # vector, represented by a dictionary that maps the indices of the entries to their coefficients,
    # for example, x = w₀ + 5w₂ + 7w₃ is {0: 1, 2: 5, 3: 7}. Entries with coefficient 0 are omitted.
    # Constants are always represented by the integer itself.

    data: dict[int, Fld] = field(default_factory=lambda: {})


Gal = Var | Fld
Bit = Gal
Bin = list[Bit]  # big-endian
Fq2 = tuple[Gal, Gal]  # re + im * u, where u² = -1


Gate = tuple[Gal, Gal, Gal, str]
Getw = Callable[[Gal], Fld]
Args = dict[str, Fld]
S_Fn = Callable[[Getw, Args], Fld]
M_Fn = Callable[[Getw, Args], Iterable[Fld]]
Func = tuple[None, S_Fn] | tuple[int, M_Fn]


class Witness:
    def __init__(self, funcs: list[Func], args: Args) -> None:
        self.vec: list[Fld] = []
        for n, func in funcs:
            res = func(self.apply, args)
            if n is None:
                self.vec.append(res)
            else:
                res = list(res)
                assert len(res) == n
                self.vec.extend(res)

    def apply(self, xGal: Gal) -> Fld:
        return xGal if isinstance(xGal, Fld) else sum(self.vec[m] * a for m, a in xGal.data.items()) % ρ  # <w, t> = Σₘ₌₀ᴹ⁻¹ wₘtₘ

    def check(self, gates: Iterable[Gate]) -> None:
        # Evaluate every constraint a * b = c against the witness vector, the message of the first
        # violated constraint is raised.
        for aGal, bGal, cGal, msg in gates:
            assert self.apply(aGal) * self.apply(bGal) % ρ == self.apply(cGal), msg
