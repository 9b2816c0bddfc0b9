"""Principal ideal rings with integer representatives.

Every ring here stores its elements as plain Python integers, so values never
overflow. The arithmetic methods (``init``, ``add``, ``sub``, ``neg``,
``mul``) are written with operators only and therefore also work element-wise
on numpy ``object`` arrays; ``VectorDomain`` relies on that to combine whole
rows and columns at once.

Python integers are immutable, so the in-place operations of a classical ring
interface (``mulin``, ``addin``, ``negin``, ``divin``, ``normalIn``) are all
expressed as functions returning the new value.
"""

from math import gcd as int_gcd


def gcdex_primitive(a, b):
    """
    Extended Euclid over the integers.
    Returns (g, s, t) such that s*a + t*b = g
    """
    r0, r1 = a, b
    s0, s1 = 1, 0
    t0, t1 = 0, 1

    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1

    return r0, s0, t0


class PIR:
    """Capability set shared by all rings used during elimination.

    Subclasses provide ``init``, ``is_unit``, ``inv``, ``div``, ``xgcd``,
    ``is_divisor`` and ``normal``; everything else is derived here.
    """

    zero = 0
    one = 1

    def init(self, x):
        raise NotImplementedError

    def is_zero(self, a) -> bool:
        return a == 0

    def is_one(self, a) -> bool:
        return a == 1

    def is_unit(self, a) -> bool:
        raise NotImplementedError

    def inv(self, a):
        raise NotImplementedError

    def add(self, a, b):
        return self.init(a + b)

    def sub(self, a, b):
        return self.init(a - b)

    def neg(self, a):
        return self.init(-a)

    def mul(self, a, b):
        return self.init(a * b)

    def div(self, a, b):
        """Return q with q*b == a. Only meaningful when b divides a."""
        raise NotImplementedError

    def xgcd(self, a, b):
        """Return (g, s, t) with g = s*a + t*b generating the ideal (a, b)."""
        raise NotImplementedError

    def gcd(self, a, b):
        return self.xgcd(a, b)[0]

    def dxgcd(self, a, b):
        """
        Extended gcd with cofactors: (g, s, t, a/g, b/g).

        The cofactors satisfy s*(a/g) + t*(b/g) == 1, which keeps the 2x2
        transform [[-b/g, a/g], [s, t]] unimodular even when the ring has
        zero divisors and quotients are not unique.
        """
        g, s, t = self.xgcd(a, b)
        if self.is_zero(g):
            return g, s, t, self.zero, self.zero
        return g, s, t, self.div(a, g), self.div(b, g)

    def is_divisor(self, a, b) -> bool:
        """True iff a divides b."""
        raise NotImplementedError

    def normal(self, a):
        """Canonical representative of the associate class of a."""
        raise NotImplementedError


class IntegerRing(PIR):
    """The integers Z."""

    def init(self, x):
        return x

    def is_unit(self, a):
        return a == 1 or a == -1

    def inv(self, a):
        if not self.is_unit(a):
            raise ValueError(f"{a} is not invertible over the integers")
        return a

    def div(self, a, b):
        if b == 0:
            if a == 0:
                return 0
            raise ValueError(f"Exact division {a}/0 impossible over the integers")
        q, r = divmod(a, b)
        if r:
            raise ValueError(f"Exact division {a}/{b} impossible over the integers")
        return q

    def xgcd(self, a, b):
        g, s, t = gcdex_primitive(a, b)
        if g < 0:
            return -g, -s, -t
        return g, s, t

    def gcd(self, a, b):
        return int_gcd(a, b)

    def dxgcd(self, a, b):
        g, s, t = self.xgcd(a, b)
        if g == 0:
            return 0, s, t, 0, 0
        return g, s, t, a // g, b // g

    def is_divisor(self, a, b):
        if a == 0:
            return b == 0
        return b % a == 0

    def normal(self, a):
        return abs(a)

    def __repr__(self):
        return "IntegerRing()"


class RingZModN(PIR):
    """The ring Z/NZ with canonical representatives in [0, N)."""

    def __init__(self, N):
        if N < 1:
            raise ValueError(f"Modulus must be positive, got {N}")
        self.N = N

    def init(self, x):
        return x % self.N

    def is_unit(self, a):
        return int_gcd(a, self.N) == 1

    def inv(self, a):
        # pow raises ValueError for non-units
        return pow(a, -1, self.N)

    def div(self, a, b):
        # Exact division through the unit part of b:
        # b = g * u with g = gcd(b, N) and u invertible mod N/g.
        N = self.N
        a %= N
        b %= N
        g = int_gcd(b, N)
        if a % g:
            raise ValueError(f"Exact division {a}/{b} impossible in Z/{N}")
        m = N // g
        if m == 1:
            return 0
        return (a // g) * pow(b // g, -1, m) % m

    def xgcd(self, a, b):
        """
        Extended gcd on the canonical representatives.

        The integer gcd g of the representatives satisfies
        gcd(g, N) == gcd(a, b, N), so g generates the ideal (a, b).
        """
        g, s, t = gcdex_primitive(a % self.N, b % self.N)
        if g == 0:
            return 0, 1, 0
        return g % self.N, s % self.N, t % self.N

    def gcd(self, a, b):
        return int_gcd(a % self.N, b % self.N)

    def dxgcd(self, a, b):
        # Integer cofactors of the representatives are exact, so
        # s*(a/g) + t*(b/g) == 1 holds over Z and hence in Z/N.
        a %= self.N
        b %= self.N
        g, s, t = gcdex_primitive(a, b)
        if g == 0:
            return 0, 1, 0, 0, 0
        return g, s % self.N, t % self.N, a // g, b // g

    def is_divisor(self, a, b):
        return b % int_gcd(a, self.N) == 0

    def normal(self, a):
        return int_gcd(a, self.N) % self.N

    def __repr__(self):
        return f"RingZModN({self.N})"


class LocalRingZModPK(RingZModN):
    """
    The local ring Z/p^k.

    Its only maximal ideal is (p): an element is a unit iff p does not
    divide it, and every non-unit is associate to a power of p.
    """

    def __init__(self, p, k):
        if p < 2 or k < 1:
            raise ValueError(f"Invalid prime power {p}^{k}")
        super().__init__(p ** k)
        self.p = p
        self.k = k

    def is_unit(self, a):
        return a % self.p != 0

    def valuation(self, a):
        """Exponent of p in a; k for zero."""
        a %= self.N
        if a == 0:
            return self.k
        v = 0
        while a % self.p == 0:
            a //= self.p
            v += 1
        return v

    def normal(self, a):
        return self.p ** self.valuation(a) % self.N

    def __repr__(self):
        return f"LocalRingZModPK({self.p}, {self.k})"


class Local2_32(LocalRingZModPK):
    """Z/2^32 with word-width arithmetic: reduction is a bit mask."""

    BITS = 32
    MASK = (1 << 32) - 1

    def __init__(self):
        super().__init__(2, self.BITS)

    def init(self, x):
        return x & self.MASK

    def is_unit(self, a):
        return a & 1 == 1

    def valuation(self, a):
        a &= self.MASK
        if a == 0:
            return self.BITS
        # Number of trailing zero bits.
        return (a & -a).bit_length() - 1

    def normal(self, a):
        return (1 << self.valuation(a)) & self.MASK

    def __repr__(self):
        return "Local2_32()"
