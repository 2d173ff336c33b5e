from py_ecc.optimized_bls12_381 import FQ, FQ2

from .types import ρ, Fld


# Out-of-circuit counterparts of the gadgets, the bit helpers are also used to compute the witness
# entries and the public constants of the circuits.


def to_bits_be(xInt: int, xLen: int) -> list[Fld]:
    # Convert x to a big-endian bit list of exactly the given length, for example, to_bits_be(6, 3)
    # returns [1, 1, 0] and to_bits_be(6, 2) raises an error because 6 does not fit in 2 bits.
    if xLen < 0:
        raise ValueError("invalid bit length")
    if not 0 <= xInt < 0x02**xLen:
        raise ValueError("{} does not fit in {} bits".format(xInt, xLen))
    return [xInt >> iLen & 0x01 for iLen in reversed(range(xLen))]


def from_bits_be(xBin: list[Fld]) -> int:
    return sum(xBit << iLen for iLen, xBit in enumerate(reversed(xBin)))


P_BITS_BE = to_bits_be(ρ, ρ.bit_length())  # the modulus as a public 381-bit constant


def mod2(x: FQ) -> int:
    return x.n % 0x02


def sgn0(x: FQ2) -> int:
    # sgn0 for GF(P²) as defined in RFC 9380 section 4.1: the parity of the real part, unless the
    # real part is zero, in which case the parity of the imaginary part.
    re, im = x.coeffs
    return re % 0x02 | (re == 0x00 and im % 0x02)
