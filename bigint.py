# representation:
#  values that fit a signed 32-bit word are stored as that word in _sign and
#    _limbs is None. nothing is allocated for them.
#  anything bigger is a 1-d uint32 array of limbs, least significant first,
#    and _sign is 0 or -1: the word conceptually repeated above the last limb.
#    so the array is 2s complement with infinite sign extension, and _sign is
#    not a magnitude sign flag.
#  _normalized is the only way to reach the array form. it trims redundant
#    sign words and collapses to a single word whenever possible, so each
#    value has exactly one encoding. equality and hashing rely on that.
#  values never change after construction. operations build fresh arrays,
#    may scribble on those, then pass them through _normalized which copies
#    what it keeps.

import collections
import operator

import numpy

import mpn

LIMB_BITS = mpn.LIMB_BITS

QuotientRemainder = collections.namedtuple('QuotientRemainder', ['quotient', 'remainder'])


class BigInt:
    '''Arbitrary-size signed integer.'''

    __slots__ = ('_limbs', '_sign')

    def __init__(self, value=0):
        if type(value) is BigInt:
            self._limbs = value._limbs
            self._sign = value._sign
            return
        if isinstance(value, numpy.integer):
            value = int(value)
        elif hasattr(value, '__array_namespace__'):
            xp = value.__array_namespace__()
            if value.shape != () or not xp.isdtype(value.dtype, 'integral'):
                raise TypeError(value.dtype)
            value = int(value)
        if not isinstance(value, int):
            raise TypeError(type(value))
        value = BigInt._from_native(int(value))
        self._limbs = value._limbs
        self._sign = value._sign

    @classmethod
    def _compact(cls, word):
        x = object.__new__(cls)
        x._limbs = None
        x._sign = word
        return x

    @classmethod
    def _from_native(cls, value):
        if mpn.INT32_MIN <= value <= mpn.INT32_MAX:
            return cls._compact(value)
        return cls._normalized(*mpn.from_int(value))

    @classmethod
    def _normalized(cls, limbs, sign):
        if sign != 0 and sign != -1:
            raise ValueError('sign must be 0 (positive) or -1 (negative).')
        size = mpn.normalize(limbs, sign)
        if size == 0:
            # only sign words, or nothing at all
            return cls._compact(sign if limbs.shape[0] else 0)
        top = int(limbs[size-1])
        if size == 1 and (top >> (LIMB_BITS - 1)) == (sign & 1):
            return cls._compact(mpn.signed(top))
        x = object.__new__(cls)
        x._limbs = mpn.xp.asarray(limbs[:size], copy=True)
        x._sign = sign
        mpn.ASSERT_NORMAL(x._limbs, x._sign)
        return x

    @classmethod
    def _coerce(cls, value):
        if type(value) is cls:
            return value
        return cls(value)

    @classmethod
    def _operand(cls, value):
        # like _coerce, but None for types the operators should decline
        if type(value) is cls:
            return value
        if isinstance(value, (int, numpy.integer)):
            return cls(value)
        return None

    def _words(x):
        # limbs and extension sign for either form. a single word is
        # presented as a one-limb array.
        if x._limbs is None:
            return mpn.xp.asarray([x._sign & mpn.LIMB_MASK], dtype=mpn.xp.uint32), x._sign >> (LIMB_BITS - 1)
        return x._limbs, x._sign

    @property
    def limbs(self):
        '''Number of stored limbs; 0 for the single-word form.'''
        return 0 if self._limbs is None else self._limbs.shape[0]

    @property
    def is_zero(self):
        return self._limbs is None and self._sign == 0

    @property
    def sign(self):
        '''-1 for negative numbers, 0 for zero, 1 for positive numbers.'''
        if self._sign < 0:
            return -1
        return 0 if self.is_zero else 1

    @property
    def most_significant_bit(self):
        '''Index of the most significant bit that differs from the sign.

        For positive numbers this is the top '1' bit, for negative numbers
        the top '0' bit. Zero and -1 give -1.'''
        if self._limbs is None:
            word = self._sign
            return (~word if word < 0 else word).bit_length() - 1
        size = self._limbs.shape[0]
        top = int(self._limbs[size-1]) ^ mpn.sign_word(self._sign)
        return (size - 1) * LIMB_BITS + top.bit_length() - 1

    def get_bit(self, index):
        '''Whether the bit at index is 1. Bits above the stored limbs follow the sign.'''
        index = operator.index(index)
        if index < 0:
            raise ValueError('index cannot be negative.')
        if self._limbs is None:
            return bool((self._sign >> index) & 1)
        return mpn.bit(self._limbs, self._sign, index)

    # additive

    def _add(a, b, subtract):
        if a._limbs is None and b._limbs is None:
            return BigInt._from_native(a._sign - b._sign if subtract else a._sign + b._sign)

        wa, sa = a._words()
        wb, sb = b._words()
        size = max(wa.shape[0], wb.shape[0])

        # the signed top digits plus a possible carry have to stay inside one
        # signed word, or the sum needs another limb
        top_b = mpn.top_digit(wb, sb, size - 1)
        top = mpn.top_digit(wa, sa, size - 1) + (~top_b if subtract else top_b)
        if top < mpn.INT32_MIN or top + 1 > mpn.INT32_MAX:
            size += 1

        wb = mpn.extend(wb, sb, size)
        if subtract:
            wb = mpn.com(wb)
        total, _ = mpn.add_n(mpn.extend(wa, sa, size), wb, 1 if subtract else 0)
        return BigInt._normalized(total, -(int(total[size-1]) >> (LIMB_BITS - 1)))

    def add(self, other):
        return self._add(BigInt._coerce(other), subtract=False)

    def subtract(self, other):
        return self._add(BigInt._coerce(other), subtract=True)

    def negate(self):
        return ZERO._add(self, subtract=True)

    def absolute_value(self):
        return self.negate() if self._sign < 0 else self

    def increment(self):
        return self._add(ONE, subtract=False)

    def decrement(self):
        return self._add(ONE, subtract=True)

    # multiplicative

    def multiply(a, b):
        b = BigInt._coerce(b)
        if a.is_zero or b.is_zero:
            return ZERO
        if a._limbs is None and a._sign in (1, -1):
            return b if a._sign == 1 else b.negate()
        if b._limbs is None and b._sign in (1, -1):
            return a if b._sign == 1 else a.negate()
        if a._limbs is None and b._limbs is None:
            return BigInt._from_native(a._sign * b._sign)

        # room for both magnitudes and the sign
        size = (a.most_significant_bit + b.most_significant_bit + 33 + LIMB_BITS - 1) // LIMB_BITS
        wa, sa = a._words()
        wb, sb = b._words()
        product = mpn.mul_n(mpn.extend(wa, sa, size), mpn.extend(wb, sb, size), size)
        return BigInt._normalized(product, sa ^ sb)

    # division

    def divide_modulo(a, b):
        '''Truncating division: the quotient rounds toward zero and the
        remainder takes the sign of the dividend.'''
        b = BigInt._coerce(b)
        if b.is_zero:
            raise ZeroDivisionError('division by zero')

        if a._limbs is None and b._limbs is None:
            quo = abs(a._sign) // abs(b._sign)
            if (a._sign < 0) != (b._sign < 0):
                quo = -quo
            return QuotientRemainder(BigInt._from_native(quo), BigInt._compact(a._sign - quo * b._sign))

        neg_a = a._sign < 0
        neg_b = b._sign < 0
        if neg_a:
            a = a.negate()
        if neg_b:
            b = b.negate()

        # starts out as the dividend; shifted divisors are subtracted from it
        # until it is smaller than the divisor and holds the remainder
        num, _ = a._words()
        den, _ = b._words()
        rem = mpn.extend(num, 0, num.shape[0] + 1)
        span = den.shape[0] + 1
        # den << offset for each sub-limb offset, built as needed
        aligned = {}
        quo = None

        shift = a.most_significant_bit - b.most_significant_bit
        while shift >= 0:
            whole, offset = divmod(shift, LIMB_BITS)
            d = aligned.get(offset)
            if d is None:
                d = aligned[offset] = mpn.lshift(den, offset, span)
            # everything in rem at or above limb `whole` lies in this window.
            # an equal window still takes the bit.
            window = rem[whole:whole+span]
            if mpn.cmp_n(window, d) >= 0:
                if quo is None:
                    quo = mpn.xp.zeros(whole + 1, dtype=mpn.xp.uint32)
                quo[whole] = int(quo[whole]) | (1 << offset)
                diff, _ = mpn.sub_n(window, d)
                rem[whole:whole+span] = diff
            shift -= 1

        r = BigInt._normalized(rem, 0)
        q = ZERO if quo is None else BigInt._normalized(quo, 0)
        return QuotientRemainder(
            q.negate() if neg_a != neg_b else q,
            r.negate() if neg_a else r,
        )

    def divide(self, other):
        return self.divide_modulo(other).quotient

    def modulo(self, other):
        return self.divide_modulo(other).remainder

    def _floor_divmod(a, b):
        q, r = a.divide_modulo(b)
        if not r.is_zero and (r._sign < 0) != (b._sign < 0):
            q = q.decrement()
            r = r.add(b)
        return q, r

    # bitwise

    def shift_left(self, amount):
        amount = operator.index(amount)
        if amount == 0 or self.is_zero:
            return self
        if amount < 0:
            return self.shift_right(-amount)
        if self._limbs is None and amount < LIMB_BITS:
            word = self._sign << amount
            if mpn.INT32_MIN <= word <= mpn.INT32_MAX:
                return BigInt._compact(word)

        words, sign = self._words()
        size = words.shape[0] + 1
        shifted = mpn.lshift(mpn.extend(words, sign, size), amount, size + amount // LIMB_BITS)
        return BigInt._normalized(shifted, sign)

    def shift_right(self, amount):
        '''Shifts right, rounding toward negative infinity.'''
        amount = operator.index(amount)
        if amount == 0:
            return self
        if amount < 0:
            return self.shift_left(-amount)
        if self._limbs is None:
            return BigInt._compact(self._sign >> amount)
        if self.most_significant_bit < amount:
            # every bit that differed from the sign is gone
            return BigInt._compact(self._sign)

        size = self._limbs.shape[0]
        shifted = mpn.rshift(mpn.extend(self._limbs, self._sign, size + 1), amount, size - amount // LIMB_BITS)
        return BigInt._normalized(shifted, self._sign)

    def _bitwise(a, b, op):
        wa, sa = a._words()
        wb, sb = b._words()
        size = max(wa.shape[0], wb.shape[0])
        return BigInt._normalized(op(mpn.extend(wa, sa, size), mpn.extend(wb, sb, size)), op(sa, sb))

    def bitwise_and(a, b):
        b = BigInt._coerce(b)
        if a._limbs is None:
            if b._limbs is None:
                return BigInt._compact(a._sign & b._sign)
            # a non-negative word masks off everything above itself
            if a._sign >= 0:
                return BigInt._compact(a._sign & int(b._limbs[0]))
        elif b._limbs is None and b._sign >= 0:
            return BigInt._compact(b._sign & int(a._limbs[0]))
        return a._bitwise(b, operator.and_)

    def bitwise_or(a, b):
        b = BigInt._coerce(b)
        if a._limbs is None:
            if b._limbs is None:
                return BigInt._compact(a._sign | b._sign)
            # a negative word sets everything above itself
            if a._sign < 0:
                return BigInt._compact(a._sign | int(b._limbs[0]))
        elif b._limbs is None and b._sign < 0:
            return BigInt._compact(b._sign | int(a._limbs[0]))
        return a._bitwise(b, operator.or_)

    def bitwise_xor(a, b):
        b = BigInt._coerce(b)
        if a._limbs is None and b._limbs is None:
            return BigInt._compact(a._sign ^ b._sign)
        return a._bitwise(b, operator.xor)

    def bitwise_not(self):
        if self._limbs is None:
            return BigInt._compact(~self._sign)
        return BigInt._normalized(mpn.com(self._limbs), ~self._sign)

    # derived

    def pow(self, exponent):
        exponent = BigInt._coerce(exponent)
        if exponent._sign < 0:
            raise ValueError('pow() cannot be used with a negative exponent.')
        if exponent.is_zero:
            return ONE

        v = self
        result = ONE
        bits = exponent.most_significant_bit + 1
        for bit in range(bits):
            if exponent.get_bit(bit):
                result = result.multiply(v)
            if bit + 1 < bits:
                v = v.multiply(v)
        return result

    def mod_pow(self, exponent, modulus):
        '''self ** exponent, reduced by modulus after every step.

        The result follows modulo(): it is negative when self is negative
        and the exponent is odd.'''
        exponent = BigInt._coerce(exponent)
        modulus = BigInt._coerce(modulus)
        if exponent._sign < 0:
            raise ValueError('mod_pow() cannot be used with a negative exponent.')
        if modulus._sign < 0:
            raise ValueError('mod_pow() cannot be used with a negative modulus.')
        if modulus.is_zero:
            raise ZeroDivisionError('mod_pow() cannot be used with a zero modulus.')
        if modulus._limbs is None and modulus._sign == 1:
            return ZERO
        if exponent.is_zero:
            return ONE

        v = self.modulo(modulus)
        result = ONE
        bits = exponent.most_significant_bit + 1
        for bit in range(bits):
            if exponent.get_bit(bit):
                result = result.multiply(v).modulo(modulus)
            if bit + 1 < bits:
                v = v.multiply(v).modulo(modulus)
        return result

    def sqrt(self):
        '''Floor of the square root.'''
        if self._sign < 0:
            raise ValueError('sqrt() of a negative number.')
        xp = mpn.xp
        bit = self.most_significant_bit // 2
        root = xp.zeros(bit // LIMB_BITS + 1, dtype=xp.uint32)
        while bit >= 0:
            whole, offset = divmod(bit, LIMB_BITS)
            prev = int(root[whole])
            root[whole] = prev | (1 << offset)
            v = BigInt._normalized(root, 0)
            comp = v.multiply(v).compare_to(self)
            if comp == 0:
                return v
            if comp > 0:
                root[whole] = prev
            bit -= 1
        return BigInt._normalized(root, 0)

    # comparison

    def compare_to(a, b):
        b = BigInt._coerce(b)
        if a._limbs is None:
            if b._limbs is None:
                return (a._sign > b._sign) - (a._sign < b._sign)
            # an array-form value is outside the word range on its own side
            return 1 if b._sign < 0 else -1
        if b._limbs is None:
            return -1 if a._sign < 0 else 1
        if a._sign != b._sign:
            return -1 if a._sign < b._sign else 1
        size = max(a._limbs.shape[0], b._limbs.shape[0])
        return mpn.cmp_n(mpn.extend(a._limbs, a._sign, size), mpn.extend(b._limbs, b._sign, size))

    def __hash__(self):
        # equal to hash() of the same int, since the two compare equal
        if self._limbs is None:
            return hash(self._sign)
        return hash(int(self))

    # conversion

    @classmethod
    def parse(cls, text):
        import bigtext
        return bigtext.parse(text)

    @classmethod
    def try_parse(cls, text):
        import bigtext
        return bigtext.try_parse(text)

    def to_string(self):
        import bigtext
        return bigtext.to_string(self)

    def __int__(self):
        if self._limbs is None:
            return self._sign
        return mpn.to_int(self._limbs, self._sign)
    __index__ = __int__

    def __bool__(self):
        return not self.is_zero

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return 'BigInt(' + self.to_string() + ')'

    # python operators

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.absolute_value()

    def __invert__(self):
        return self.bitwise_not()

    def __lshift__(self, amount):
        return self.shift_left(amount)

    def __rshift__(self, amount):
        return self.shift_right(amount)

    def __rlshift__(self, value):
        return BigInt(value).shift_left(self)

    def __rrshift__(self, value):
        return BigInt(value).shift_right(self)

    def __pow__(self, exponent, modulus=None):
        if modulus is None:
            return self.pow(exponent)
        modulus = BigInt._coerce(modulus)
        # three-argument pow lands in [0, modulus) like int's
        result = self.mod_pow(exponent, modulus)
        return result.add(modulus) if result._sign < 0 else result

    def __rpow__(self, base):
        return BigInt(base).pow(self)


def __BigIntOp(opname, method, reflected):
    def op(a, b):
        b = BigInt._operand(b)
        if b is None:
            return NotImplemented
        return method(b, a) if reflected else method(a, b)
    op.__name__ = opname
    return op
for opname, method in [
        ['add', BigInt.add],
        ['sub', BigInt.subtract],
        ['mul', BigInt.multiply],
        ['and', BigInt.bitwise_and],
        ['or', BigInt.bitwise_or],
        ['xor', BigInt.bitwise_xor],
        # // % and divmod use the floor convention of int; the truncating
        # forms are divide, modulo and divide_modulo
        ['floordiv', lambda a, b: a._floor_divmod(b)[0]],
        ['mod', lambda a, b: a._floor_divmod(b)[1]],
        ['divmod', BigInt._floor_divmod],
]:
    for prefix in ['', 'r']:
        name = f'__{prefix}{opname}__'
        setattr(BigInt, name, __BigIntOp(name, method, reflected=prefix == 'r'))

def __BigIntCompare(opname):
    compare = getattr(operator, opname)
    def op(a, b):
        b = BigInt._operand(b)
        if b is None:
            return NotImplemented
        return compare(a.compare_to(b), 0)
    op.__name__ = f'__{opname}__'
    return op
for opname in ['eq', 'ne', 'lt', 'le', 'gt', 'ge']:
    setattr(BigInt, f'__{opname}__', __BigIntCompare(opname))

ZERO = BigInt._compact(0)
ONE = BigInt._compact(1)


if __name__ == '__main__':
    import array_api_strict
    import numpy as np
    mpn.xp = array_api_strict
    np.random.seed(0)

    for idx in range(64):
        a = int.from_bytes(np.random.bytes(24), 'little') - (1 << 191)
        b = int.from_bytes(np.random.bytes(int(np.random.randint(1, 16))), 'little') - (1 << 20)
        x = BigInt(a)
        y = BigInt(b)
        assert int(x) == a
        assert int(x + y) == a + b
        assert int(x - y) == a - b
        assert int(x * y) == a * b
        # run as a script this module is __main__, and bigtext builds
        # values of the imported bigint.BigInt, so compare as int
        assert int(BigInt.parse(str(x))) == a
        assert str(x) == str(a)
        if b != 0:
            q, r = x.divide_modulo(y)
            assert q * y + r == x
            assert r.is_zero or r.sign == x.sign
            assert int(x // y) == a // b
            assert int(x % y) == a % b
        assert int(x & y) == a & b
        assert int(x | y) == a | b
        assert int(x ^ y) == a ^ b
        assert int(~x) == ~a
        assert int(x << 37) == a << 37
        assert int(x >> 37) == a >> 37
        assert int(abs(x).sqrt()) ** 2 <= abs(a) < (int(abs(x).sqrt()) + 1) ** 2
    print('ok')
