import math

import pytest

from core.complex import Complex

z1 = Complex(-1.13, -2.15)
z2 = Complex(0.57, -3.11)
z3 = Complex(13.3, 0)
z4 = Complex(0, 3)
z5 = Complex(0, 0)


def test_module():
    assert z2.module() == pytest.approx(3.1618, abs=1e-4)
    assert z3.module() == pytest.approx(13.3)
    assert z4.module() == pytest.approx(3)
    assert z1.module() == pytest.approx(2.42887, abs=1e-4)
    assert z5.module() == 0


def test_angle_is_normalized_into_full_turn():
    assert z2.angle() == pytest.approx(4.8936, abs=1e-4)
    assert z4.angle() == pytest.approx(math.pi / 2)
    assert z1.angle() == pytest.approx(4.228489, abs=1e-4)
    assert z3.angle() == 0
    assert z5.angle() == 0


def test_add_and_sub():
    assert z1.add(z2) == Complex(-0.56, -5.26)
    assert z2 + z3 == Complex(13.87, -3.11)
    assert z4.add(z5) == Complex(0, 3)
    assert z1.sub(z2) == Complex(-1.7, 0.96)
    assert z3 - z4 == Complex(13.3, -3)


def test_add_then_sub_gives_back_original():
    for a in (z1, z2, z3, z4, z5):
        for b in (z1, z2, z3, z4, z5):
            assert a.add(b).sub(b) == a


def test_multiply_and_divide():
    assert z1.multiply(z2) == Complex(-7.3306, 2.2888)
    assert z4 * z5 == Complex(0, 0)
    assert z1.divide(z2) == Complex(0.6044213, -0.4741222)
    assert z2 / z4 == Complex(-1.0366667, -0.19)


def test_divide_by_zero():
    with pytest.raises(ZeroDivisionError):
        z1.divide(z5)


def test_negate():
    assert -z1 == Complex(1.13, 2.15)
    assert z2.negate() == Complex(-0.57, 3.11)


def test_power():
    assert z2.power(3) == Complex(-16.354098, 27.048914)
    assert z5.power(2) == Complex(0, 0)
    assert z2.power(0) == Complex(1, 0)


def test_negative_power_is_rejected():
    with pytest.raises(ValueError):
        z2.power(-1)


@pytest.mark.parametrize("n", [0, -3])
def test_non_positive_root_count_is_rejected(n):
    with pytest.raises(ValueError):
        z2.root(n)


@pytest.mark.parametrize("z", [z1, z2, z3, z4, Complex(1, 0)])
@pytest.mark.parametrize("n", [1, 2, 3, 5])
def test_root_round_trips_through_power(z, n):
    roots = z.root(n)
    assert len(roots) == n
    for r in roots:
        back = r.power(n)
        assert back.re == pytest.approx(z.re, abs=1e-9)
        assert back.im == pytest.approx(z.im, abs=1e-9)


def test_roots_of_unity_order():
    roots = Complex.ONE.root(4)
    assert roots == [Complex.ONE, Complex.IM, Complex.ONE_NEG, Complex.IM_NEG]


def test_equality_tolerance():
    assert Complex(1, 1) == Complex(1 + 5e-7, 1 - 5e-7)
    assert Complex(1, 1) != Complex(1 + 2e-6, 1)
    assert Complex(1, 0) != 1


def test_none_operand_is_rejected():
    with pytest.raises(TypeError):
        z1.add(None)
    with pytest.raises(TypeError):
        z1.multiply(None)


def test_values_are_immutable():
    with pytest.raises(AttributeError):
        z1.re = 5


def test_str():
    assert str(Complex(1, 2)) == "1+2i"
    assert str(Complex(0, -1)) == "-1i"
    assert str(Complex(1.5, 0)) == "1.5"
    assert str(Complex(-0.5, -0.25)) == "-0.5-0.25i"
    assert str(Complex(0, 0)) == "0"


def test_converts_to_builtin_complex():
    assert complex(z2) == complex(0.57, -3.11)


@pytest.mark.parametrize("text, expected", [
    ("1", Complex(1, 0)),
    ("-1", Complex(-1, 0)),
    ("i", Complex(0, 1)),
    ("-i", Complex(0, -1)),
    ("i0", Complex(0, 0)),
    ("0-i0", Complex(0, 0)),
    ("-i2.5", Complex(0, -2.5)),
    ("0.5-i0.866", Complex(0.5, -0.866)),
    ("-2.5+i3", Complex(-2.5, 3)),
    ("1+i", Complex(1, 1)),
    (" 1 + i 2 ", Complex(1, 2)),
    (".5", Complex(0.5, 0)),
])
def test_parse(text, expected):
    assert Complex.parse(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "1i2", "1+", "i-", "2i", "1.2.3"])
def test_parse_rejects_invalid_input(text):
    with pytest.raises(ValueError):
        Complex.parse(text)
