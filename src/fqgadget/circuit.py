from typing import Iterable

from .types import ρ, Fld, Var, Gal, Gate, Func, S_Fn, M_Fn


class Circuit:
    # The Circuit class accumulates the constraints over the base field GF(P), it provides the methods
    # to create entries in the witness vector, to add constraints, and to perform field arithmetic on
    # the variables linearly combined by the entries in the witness vector. Every operation returns a
    # new variable, variables are never modified once created.

    wire_count: int  # dimension of the witness vector
    funcs: list[Func]  # functions to generate the witness vector entries
    stmts: dict[int, str]  # the public entries, keys are their indices in the witness vector, and values are their names
    gates: list[Gate]  # the constraints in the circuit, see the MKGATE method for details

    def __init__(self) -> None:
        self.wire_count = 0
        self.funcs = []
        self.stmts = {}
        self.gates = []
        # add a constant 1 to the witness vector
        [self.one] = self.MKWIRE(lambda getw, args: 0x01, "ONE").data

    def MKWIRE(self, func: S_Fn, name: str | None = None) -> Var:
        # Add a new entry defined by the given function to the witness vector, the entry itself is not
        # constrained in any way. For example, x = MKWIRE(lambda getw, args: pow(getw(y), -1, ρ)) adds
        # an entry holding the inverse of y, which must then be tied to y by a constraint.
        i = self.wire_count
        self.funcs.append((None, func))
        self.wire_count += 1
        # if name is specified, the entry will be treated as public
        if name is not None:
            self.stmts[i] = name
        return Var({i: 0x01})

    def MKWIRES(self, func: M_Fn, n: int) -> list[Var]:
        # Add n new entries defined by the given function to the witness vector, and return them as a
        # list of variables.
        i = self.wire_count
        self.funcs.append((n, func))
        self.wire_count += n
        return [Var({i + j: 0x01}) for j in range(n)]

    def MKGATE(self, xGal: Gal, yGal: Gal, zGal: Gal, *, msg="assertion error") -> None:
        # Add a constraint to the circuit, the constraint is represented as (x, y, z, msg), which means
        # x * y = z, msg is the error message when the constraint is not satisfied. A constraint that
        # only involves constants is checked immediately.
        if isinstance(xGal, Fld) or isinstance(yGal, Fld):
            zGal = self.SUB(zGal, self.MUL(xGal, yGal))
            if isinstance(zGal, Fld):
                assert zGal == 0x00, msg
                return
            xGal = 0x00
            yGal = 0x00
        self.gates.append((xGal, yGal, zGal, msg))

    def PARAM(self, name: str, public: bool = False) -> Var:
        # Add a new entry to the witness vector, whose value will be determined by the value correspond-
        # ing to the key named name in the args dictionary at runtime.
        return self.MKWIRE(lambda getw, args: args[name] % ρ, name if public else None)

    def REVEAL(self, name: str, xGal: Gal, *, msg="reveal error") -> Var:
        # Add a public entry to the witness vector, whose value is equal to that of the given variable.
        rGal = self.MKWIRE(lambda getw, args: getw(xGal), name)
        self.ASSERT_EQ(xGal, rGal, msg=msg)
        return rGal

    # basic arithmetic operations on variables

    def ADD(self, xGal: Gal, yGal: Gal) -> Gal:
        if isinstance(xGal, Fld):
            xGal = Var({self.one: xGal})
        if isinstance(yGal, Fld):
            yGal = Var({self.one: yGal})
        rGal = Var({k: v for k in xGal.data.keys() | yGal.data.keys() if (v := (xGal.data.get(k, 0x00) + yGal.data.get(k, 0x00)) % ρ)})
        return rGal.data.get(self.one, 0x00) if rGal.data.keys() <= {self.one} else rGal

    def SUB(self, xGal: Gal, yGal: Gal) -> Gal:
        if isinstance(xGal, Fld):
            xGal = Var({self.one: xGal})
        if isinstance(yGal, Fld):
            yGal = Var({self.one: yGal})
        rGal = Var({k: v for k in xGal.data.keys() | yGal.data.keys() if (v := (xGal.data.get(k, 0x00) - yGal.data.get(k, 0x00)) % ρ)})
        return rGal.data.get(self.one, 0x00) if rGal.data.keys() <= {self.one} else rGal

    def SUM(self, iLst: Iterable[Gal], rGal: Gal = 0x00) -> Gal:
        rGal = Var({self.one: rGal}) if isinstance(rGal, Fld) else Var(rGal.data.copy())
        for iGal in iLst:
            if isinstance(iGal, Fld):
                rGal.data[self.one] = rGal.data.get(self.one, 0x00) + iGal
            else:
                for k, v in iGal.data.items():
                    rGal.data[k] = rGal.data.get(k, 0x00) + v
        rGal = Var({k: t for k, v in rGal.data.items() if (t := v % ρ)})
        return rGal.data.get(self.one, 0x00) if rGal.data.keys() <= {self.one} else rGal

    def MUL(self, xGal: Gal, yGal: Gal, *, msg="multiplication error") -> Gal:
        if isinstance(xGal, Fld) and isinstance(yGal, Fld):
            return xGal * yGal % ρ
        if xGal == 0x00 or yGal == 0x00:
            return 0x00
        if isinstance(yGal, Fld) and isinstance(xGal, Var):
            return Var({k: v * yGal % ρ for k, v in xGal.data.items()})
        if isinstance(xGal, Fld) and isinstance(yGal, Var):
            return Var({k: v * xGal % ρ for k, v in yGal.data.items()})
        zGal = self.MKWIRE(lambda getw, args: getw(xGal) * getw(yGal) % ρ)
        self.MKGATE(xGal, yGal, zGal, msg=msg)
        return zGal

    def SQR(self, xGal: Gal, *, msg="squaring error") -> Gal:
        return self.MUL(xGal, xGal, msg=msg)

    def DIV(self, xGal: Gal, yGal: Gal, *, msg="division error") -> Gal:
        # Division in the finite field GF(P), the divisor must be invertible. Since every non-zero
        # divisor is invertible, there is no remainder to return.
        if isinstance(xGal, Fld) and isinstance(yGal, Fld):
            return xGal * pow(yGal, -1, ρ) % ρ
        if xGal == 0x00:
            return 0x00
        if isinstance(yGal, Fld) and isinstance(xGal, Var):
            return Var({k: v * pow(yGal, -1, ρ) % ρ for k, v in xGal.data.items()})
        zGal = self.MKWIRE(lambda getw, args: getw(xGal) * pow(getw(yGal), -1, ρ) % ρ)
        self.MKGATE(zGal, yGal, xGal, msg=msg)
        return zGal

    # assertion operations on variables

    def ASSERT_EQZ(self, xGal: Gal, *, msg="EQZ assertion failed") -> None:
        self.MKGATE(0x00, 0x00, xGal, msg=msg)

    def ASSERT_EQ(self, xGal: Gal, yGal: Gal, *, msg="EQ assertion failed") -> None:
        # This is the only way two variables with equal values become bound to each other.
        self.ASSERT_EQZ(self.SUB(xGal, yGal), msg=msg)

    def ASSERT_IS_BOOL(self, xGal: Gal, *, msg="IS_BOOL assertion failed") -> None:
        # Assert x is a boolean value, x² = x has no other solutions in a field.
        self.MKGATE(xGal, xGal, xGal, msg=msg)
