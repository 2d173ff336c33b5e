from .types import ρ, Fld, Gal, Bit, Bin, Fq2
from .circuit import Circuit
from .native import to_bits_be, P_BITS_BE


class Gadgets(Circuit):
    # Gadgets for the hash-to-curve sign function on GF(P²). The circuit can only express polynomial
    # equalities, so parity, ordering and zero tests are built from bit decompositions and selectors.
    # Every gadget computes its auxiliary witness entries natively first and constrains them after.

    # bit vector gadgets

    def DOT_PRODUCT(self, aLst: list[Gal], bLst: list[Gal]) -> Gal:
        # Σᵢ aᵢbᵢ, one constraint per pair of variables, none for pairs involving a constant.
        if len(aLst) != len(bLst):
            raise ValueError("mismatched vector lengths: {} and {}".format(len(aLst), len(bLst)))
        return self.SUM(self.MUL(aGal, bGal) for aGal, bGal in zip(aLst, bLst))

    def CONSTRAIN_BITS(self, aBin: Bin, *, msg="bit constraint failed") -> None:
        # The only booleanity guarantee used by the other gadgets, a list that did not go through
        # here is not known to consist of bits.
        for aBit in aBin:
            self.ASSERT_IS_BOOL(aBit, msg=msg)

    # conversion between field elements and bit vectors

    def DECOMPOSE_INTO_BITS_BE(self, xGal: Gal, xLen: int, *, msg="bit decomposition error") -> Bin:
        # Decompose x into a big-endian list of xLen bits, for example, DECOMPOSE_INTO_BITS_BE(6, 3)
        # returns [1, 1, 0]. The length is part of the shape of the circuit, so it cannot depend on the
        # value of x, the canonical use is xLen = 381, the bit length of P.
        # The bits are only tied to x modulo P. When 2 ** xLen > P, a prover may supply the bits of
        # x + P instead of those of x, so the result is a representation of x, not necessarily the
        # minimal one.
        if xLen < 0:
            raise ValueError("invalid bit length")
        if isinstance(xGal, Fld):
            return to_bits_be(xGal, xLen)
        xBin = self.MKWIRES(lambda getw, args: to_bits_be(getw(xGal), xLen), xLen)
        self.CONSTRAIN_BITS(xBin, msg=msg)
        self.ASSERT_EQ(self.COMPOSE_BITS_BE(xBin), xGal, msg=msg)
        return xBin

    def COMPOSE_BITS_BE(self, xBin: Bin) -> Gal:
        # Convert a big-endian bit list back to a field element, for example, COMPOSE_BITS_BE([1, 0, 1])
        # returns 5.
        return self.DOT_PRODUCT(xBin, [pow(0x02, iLen, ρ) for iLen in reversed(range(len(xBin)))])

    # comparison of bit vectors

    def LEXICOGRAPHICAL_COMPARISON(self, aBin: Bin, bBin: Bin) -> Gal:
        # Compare the integers a and b encoded by two big-endian bit lists of the same length, returns
        # 1 if a < b, 0 if a = b and -1 (= P - 1) if a > b. Both lists must already be constrained to
        # bits, nothing is checked again here.
        #     c₀ = b₀ - a₀
        #     cᵢ = (1 - cᵢ₋₁²)(bᵢ - aᵢ) + cᵢ₋₁
        # cᵢ ∈ {-1, 0, 1} for all i. As long as the prefixes agree cᵢ₋₁ = 0 and the difference of the
        # current bits passes through, once they differ 1 - cᵢ₋₁² = 0 and cᵢ stays frozen.
        if len(aBin) != len(bBin):
            raise ValueError("mismatched vector lengths: {} and {}".format(len(aBin), len(bBin)))
        if not aBin:
            return 0x00
        cGal = self.SUB(bBin[0], aBin[0])
        for aBit, bBit in zip(aBin[1:], bBin[1:]):
            cGal = self.ADD(self.MUL(self.SUB(0x01, self.SQR(cGal)), self.SUB(bBit, aBit)), cGal)
        return cGal

    # parity, zero test and sign

    def MOD2(self, xGal: Gal) -> Bit:
        # The parity of the canonical representative of x in [0, P).
        # Let x' be the last bit of the decomposition of x and y the comparison of the decomposition
        # with P, then
        #     s = y(2x' + y - 1) / 2
        # y = 1 when the decomposition is below P, it is canonical and s = x'; y = -1 when it encodes
        # x + P, whose parity is flipped since P is odd, and s = 1 - x'; y = 0 only when it encodes P
        # itself, which means x = 0, and s = 0. The division is by the field inverse of 2.
        xBin = self.DECOMPOSE_INTO_BITS_BE(xGal, len(P_BITS_BE))
        yGal = self.LEXICOGRAPHICAL_COMPARISON(xBin, P_BITS_BE)
        tGal = self.DIV(self.ADD(self.MUL(xBin[-1], 0x02), self.SUB(yGal, 0x01)), 0x02)
        return self.MUL(yGal, tGal)

    def IS_ZERO(self, xGal: Gal, *, msg="zero test error") -> Bit:
        # Return 1 if x is zero and 0 otherwise.
        #     z = 1 - z'x
        #     xz = 0
        # If x ≠ 0 the second equation forces z = 0, and z' has to be the inverse of x. If x = 0 the
        # first equation forces z = 1 whatever z' is.
        if isinstance(xGal, Fld):
            return 0x01 if xGal == 0x00 else 0x00
        iGal = self.MKWIRE(lambda getw, args: pow(xVal, -1, ρ) if (xVal := getw(xGal)) else 0x00)
        zBit = self.SUB(0x01, self.MUL(iGal, xGal, msg=msg))
        self.MKGATE(xGal, zBit, 0x00, msg=msg)
        return zBit

    def SGN0(self, xFq2: Fq2) -> Bit:
        # sgn0 of re + im * u as defined in RFC 9380: the parity of re, or the parity of im if re = 0.
        #     sgn0 = re' + z * im' - z * re' * im'
        # where re' and im' are the parities and z is the zero indicator of re. For z = 0 this is re',
        # for z = 1 we have re' = 0 and it is im'.
        reGal, imGal = xFq2
        reBit = self.MOD2(reGal)
        imBit = self.MOD2(imGal)
        zBit = self.IS_ZERO(reGal)
        tGal = self.MUL(zBit, imBit)
        return self.ADD(reBit, self.SUB(tGal, self.MUL(reBit, tGal)))

    def PARAM_FQ2(self, name: str, public: bool = False) -> Fq2:
        # Add an element of GF(P²) whose components are given by the args named name.re and name.im.
        return self.PARAM(name + ".re", public), self.PARAM(name + ".im", public)
