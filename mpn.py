# NOTE: LIMBS are the mp term for WORDS. They mean basically the same thing.
#
# the functions here work on 1-d uint32 arrays of limbs, least significant
# first. a value is a limb array plus a sign of 0 or -1, and the sign word is
# conceptually repeated forever above the last limb (2s complement with
# infinite sign extension). nothing here allocates a BigInt; bigint.py
# builds fresh arrays with these and hands them to its normalizing
# constructor.

import numpy

WANT_ASSERT = True
LIMB_BITS = 32
LIMB_MASK = (1 << LIMB_BITS) - 1
LIMB_SIGN_BIT = 1 << (LIMB_BITS - 1)
INT32_MIN = -LIMB_SIGN_BIT
INT32_MAX = LIMB_SIGN_BIT - 1

# namespace limb arrays are created in. anything implementing the array api
# with uint32 and uint64 works; the tests swap in array_api_strict.
xp = numpy


def sign_word(sign):
    return LIMB_MASK if sign else 0

def signed(word):
    '''Reinterprets an unsigned limb as a signed 32-bit value.'''
    return word - ((word & LIMB_SIGN_BIT) << 1)

# sign extension. every limb or bit read past the end of an array goes
# through one of these three.

def extend(limbs, sign, n):
    '''Returns a new array of n limbs: limbs truncated or sign-extended.'''
    data = xp.empty(n, dtype=xp.uint32)
    kept = min(limbs.shape[0], n)
    data[:kept] = limbs[:kept]
    data[kept:] = sign_word(sign)
    return data

def limb(limbs, sign, idx):
    if idx >= limbs.shape[0]:
        return sign_word(sign)
    return int(limbs[idx])

def bit(limbs, sign, idx):
    word, offset = divmod(idx, LIMB_BITS)
    return bool((limb(limbs, sign, word) >> offset) & 1)

def top_digit(limbs, sign, idx):
    # floor(value / 2**(LIMB_BITS*idx)), only meaningful at or above the
    # last stored limb where everything higher is sign extension
    return limb(limbs, sign, idx) + (sign << LIMB_BITS)

def com(limbs):
    return limbs ^ LIMB_MASK

def add_n(a, b, carry=0):
    '''Adds two equal-length limb arrays plus a carry-in of 0 or 1.

    Returns the wrapped sum and the carry out of the top limb.'''
    s = a + b
    # in cases of overflow, the sum is less than the addend
    oflows = xp.astype(s < a, xp.uint32)
    cout = int(oflows[-1])
    cin = xp.concat([xp.asarray([carry], dtype=xp.uint32), oflows[:-1]])
    # a limb that is all 0xf passes the carry along, so this repeats until
    # nothing is left to ripple. a limb that already overflowed is at most
    # 0xfffffffe and cannot overflow a second time.
    while xp.any(cin != 0):
        s = s + cin
        oflows = xp.astype(s < cin, xp.uint32)
        cout |= int(oflows[-1])
        cin = xp.concat([xp.zeros(1, dtype=xp.uint32), oflows[:-1]])
    return s, cout

def sub_n(a, b):
    # a - b == a + ~b + 1
    return add_n(a, com(b), 1)

def cmp_n(a, b):
    '''Unsigned comparison of two equal-length limb arrays, top limb first.'''
    for x, y in zip(reversed(xp.unstack(a)), reversed(xp.unstack(b))):
        x = int(x)
        y = int(y)
        if x != y:
            return -1 if x < y else 1
    return 0

def lshift(limbs, bits, n):
    '''Returns the low n limbs of limbs * 2**bits, treated as unsigned.'''
    whole, rest = divmod(bits, LIMB_BITS)
    data = xp.zeros(n, dtype=xp.uint32)
    if whole >= n:
        return data
    size = limbs.shape[0]
    kept = min(size, n - whole)
    if rest == 0:
        data[whole:whole+kept] = limbs[:kept]
        return data
    data[whole:whole+kept] = limbs[:kept] << rest
    spill = min(size, n - whole - 1)
    if spill > 0:
        data[whole+1:whole+1+spill] |= limbs[:spill] >> (LIMB_BITS - rest)
    return data

def rshift(limbs, bits, n):
    '''Returns n limbs of limbs >> bits.

    limbs must hold at least one limb above the n+bits//LIMB_BITS read, so
    callers extend by a sign word first.'''
    whole, rest = divmod(bits, LIMB_BITS)
    lo = limbs[whole:whole+n]
    if rest == 0:
        return xp.asarray(lo, copy=True)
    hi = limbs[whole+1:whole+n+1]
    return (lo >> rest) | (hi << (LIMB_BITS - rest))

def mul_n(a, b, n):
    '''Schoolbook product of two n-limb arrays, low n limbs of the result.'''
    b = xp.astype(b, xp.uint64)
    # each column collects fewer than 2n halves below 2**32, far from
    # overflowing a uint64 accumulator
    acc = xp.zeros(n, dtype=xp.uint64)
    for i, ai in enumerate(xp.unstack(a)):
        ai = int(ai)
        if ai == 0:
            continue
        prod = b[:n-i] * ai
        acc[i:] += prod & LIMB_MASK
        if i + 1 < n:
            acc[i+1:] += prod[:n-i-1] >> LIMB_BITS
    data = xp.empty(n, dtype=xp.uint32)
    carry = 0
    for i, col in enumerate(xp.unstack(acc)):
        col = int(col) + carry
        data[i] = col & LIMB_MASK
        carry = col >> LIMB_BITS
    return data

def normalize(limbs, sign):
    '''Number of limbs left after dropping top limbs equal to the sign word.'''
    word = sign_word(sign)
    size = limbs.shape[0]
    while size > 0 and int(limbs[size-1]) == word:
        size -= 1
    return size

def from_int(value):
    sign = -1 if value < 0 else 0
    # one spare limb so the top limb always carries the sign
    size = value.bit_length() // LIMB_BITS + 1
    data = xp.asarray(
        [(value >> (LIMB_BITS * idx)) & LIMB_MASK for idx in range(size)],
        dtype=xp.uint32,
    )
    return data, sign

def to_int(limbs, sign):
    accum = sign
    for item in reversed(xp.unstack(limbs)):
        accum <<= LIMB_BITS
        accum |= int(item)
    return accum

if WANT_ASSERT:
    def ASSERT_NORMAL(limbs, sign):
        assert sign == 0 or sign == -1
        size = limbs.shape[0]
        assert size >= 1
        top = int(limbs[size-1])
        # no redundant sign words on top
        assert top != sign_word(sign)
        # a lone limb agreeing with the sign belongs in a single word
        assert size > 1 or (top >> (LIMB_BITS - 1)) != (sign & 1)
else:
    def ASSERT_NORMAL(limbs, sign):
        pass
