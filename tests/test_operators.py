"""Python operator protocol: floor division, reflected operands, coercion."""

import itertools
import operator

import numpy
import pytest

from bigint import BigInt
from tests.oracle import EDGES


class TestFloorDivision:
    def test_match_int(self, values):
        for a, b in itertools.product(values, repeat=2):
            if b == 0:
                continue
            x, y = BigInt(a), BigInt(b)
            assert int(x // y) == a // b
            assert int(x % y) == a % b
            q, r = divmod(x, y)
            assert (int(q), int(r)) == divmod(a, b)

    @pytest.mark.parametrize('a, b', [(-7, 2), (7, -2), (-2**70 - 1, 2**33), (2**70 + 1, -3)])
    def test_differs_from_truncating(self, a, b):
        x = BigInt(a)
        assert x // b == a // b
        assert x % b == a % b
        assert x.divide(b) == a // b + 1
        assert x.modulo(b) == a % b - b

    def test_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            BigInt(5) // 0
        with pytest.raises(ZeroDivisionError):
            BigInt(2**80) % BigInt(0)
        with pytest.raises(ZeroDivisionError):
            divmod(BigInt(5), 0)


class TestReflected:
    def test_int_on_the_left(self):
        assert 5 + BigInt(3) == 8
        assert 5 - BigInt(3) == 2
        assert 5 * BigInt(-3) == -15
        assert 7 // BigInt(2) == 3
        assert -7 % BigInt(2) == 1
        assert divmod(7, BigInt(-2)) == (-4, -1)
        assert 12 & BigInt(10) == 8
        assert 12 | BigInt(10) == 14
        assert 12 ^ BigInt(10) == 6
        assert 2 ** BigInt(10) == 1024
        assert 1 << BigInt(40) == 2**40
        assert 2**40 >> BigInt(39) == 2

    def test_result_type(self):
        assert type(5 + BigInt(3)) is BigInt
        assert type(2 ** BigInt(10)) is BigInt
        assert type(1 << BigInt(40)) is BigInt

    def test_numpy_integer_on_the_right(self):
        x = BigInt(2**40)
        assert x + numpy.int64(1) == 2**40 + 1
        assert x * numpy.uint32(2**32 - 1) == 2**40 * (2**32 - 1)
        assert x - numpy.int8(-3) == 2**40 + 3

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            BigInt(1) + 1.5
        with pytest.raises(TypeError):
            1.5 * BigInt(1)
        with pytest.raises(TypeError):
            BigInt(1) < 'a'


class TestPowOperator:
    def test_two_arguments(self, values):
        for a, e in itertools.product(values, [0, 1, 3]):
            assert BigInt(a) ** e == a ** e

    def test_three_arguments(self, values):
        for a, e, m in itertools.product(values, [0, 1, 5], [1, 7, 2**33 + 1]):
            result = pow(BigInt(a), e, m)
            assert int(result) == pow(a, e, m)
            assert 0 <= result < m

    def test_three_arguments_with_modulus_object(self):
        assert pow(BigInt(-3), BigInt(3), BigInt(10)) == 3


class TestUnary:
    @pytest.mark.parametrize('value', EDGES)
    def test_match_int(self, value):
        x = BigInt(value)
        assert int(-x) == -value
        assert +x is x
        assert int(abs(x)) == abs(value)
        assert int(~x) == ~value
        assert bool(x) == bool(value)

    def test_index(self):
        assert operator.index(BigInt(2**40)) == 2**40
        assert [10, 20, 30][BigInt(1)] == 20
        assert BigInt(7) >> BigInt(1) == 3
        assert hex(BigInt(-255)) == '-0xff'
