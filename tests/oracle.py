"""Python int reference values and helpers shared by the tests."""

import mpn

EDGES = [
    0, 1, -1, 2, -7,
    2**31 - 1, -2**31, 2**31, -2**31 - 1,
    2**32 - 1, 2**32, -2**32,
    2**63 - 1, -2**63, 2**64 + 3, -2**64 - 3,
    3**41, -7**30,
]


def random_ints(rng, count, max_bits):
    out = []
    for _ in range(count):
        bits = int(rng.integers(1, max_bits + 1))
        value = int.from_bytes(rng.bytes((bits + 7) // 8), 'little') >> (-bits % 8)
        out.append(-value if rng.integers(2) else value)
    return out


def tdivmod(a, b):
    """Division truncating toward zero, remainder with the dividend's sign."""
    quo = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quo = -quo
    return quo, a - quo * b


def as_list(limbs):
    return [int(item) for item in mpn.xp.unstack(limbs)]


def u32(words):
    return mpn.xp.asarray(words, dtype=mpn.xp.uint32)
