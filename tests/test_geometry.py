import math

import pytest

from geometry import ZERO, add, clamp01, dot, length, mul, neg, norm, reflect, refract, sub, to_byte

# --- Componentwise arithmetic ---

def test_arithmetic_three_vectors():
    a = (1.0, 2.0, 3.0)
    b = (4.0, -5.0, 0.5)
    assert add(a, b) == (5.0, -3.0, 3.5)
    assert sub(a, b) == (-3.0, 7.0, 2.5)
    assert mul(a, 2.0) == (2.0, 4.0, 6.0)
    assert neg(a) == (-1.0, -2.0, -3.0)
    assert dot(a, b) == 4.0 - 10.0 + 1.5

def test_arithmetic_other_sizes():
    """2- and 4-component vectors use the same operations."""
    assert add((1.0, 2.0), (3.0, 4.0)) == (4.0, 6.0)
    assert dot((1.0, 0.0, 2.0, 1.0), (3.0, 9.0, 1.0, 1.0)) == 6.0
    assert length((3.0, 4.0)) == 5.0

def test_operations_return_new_tuples():
    a = (1.0, 2.0, 3.0)
    result = add(a, ZERO)
    assert result == a
    assert isinstance(result, tuple)

@pytest.mark.parametrize("op", [add, sub, dot])
def test_length_mismatch_raises(op):
    with pytest.raises(ValueError):
        op((1.0, 2.0, 3.0), (1.0, 2.0))

# --- Normalization ---

@pytest.mark.parametrize("v", [
    (3.0, 4.0, 0.0),
    (-0.001, 0.002, 0.0005),
    (1e6, -2e6, 3e6),
    (1.0, 1.0, 1.0, 1.0),
])
def test_norm_gives_unit_length(v):
    assert length(norm(v)) == pytest.approx(1.0, abs=1e-12)

def test_norm_zero_vector_fails_fast():
    with pytest.raises(ZeroDivisionError):
        norm(ZERO)

# --- Reflection ---

def test_reflect_flips_normal_component():
    i = norm((1.0, -1.0, 0.5))
    n = norm((0.0, 1.0, 0.2))
    r = reflect(i, n)
    assert dot(r, n) == pytest.approx(-dot(i, n), abs=1e-12)
    assert length(r) == pytest.approx(1.0, abs=1e-12)

def test_reflect_head_on():
    assert reflect((0.0, 0.0, -1.0), (0.0, 0.0, 1.0)) == (0.0, 0.0, 1.0)

# --- Refraction ---

def test_refract_unit_index_does_not_bend():
    i = norm((0.3, -0.4, -1.0))
    n = (0.0, 0.0, 1.0)
    assert refract(i, n, 1.0) == pytest.approx(i, abs=1e-12)

def test_refract_head_on_passes_straight():
    assert refract((0.0, 0.0, -1.0), (0.0, 0.0, 1.0), 1.5) == pytest.approx((0.0, 0.0, -1.0))

def test_refract_obeys_snell():
    """Entering glass at 45 degrees: sin(t) = sin(45) / 1.5."""
    t = refract(norm((1.0, 0.0, -1.0)), (0.0, 0.0, 1.0), 1.5)
    assert t[0] == pytest.approx(math.sin(math.pi / 4) / 1.5, abs=1e-12)
    assert t[2] < 0
    assert length(t) == pytest.approx(1.0)

def test_refract_total_internal_reflection_returns_zero():
    # Leaving glass at a grazing angle: sin(i) * 1.5 > 1
    i = norm((1.0, 0.0, 0.2))
    assert refract(i, (0.0, 0.0, 1.0), 1.5) == ZERO

def test_refract_leaving_medium_below_critical_angle():
    i = norm((0.2, 0.0, 1.0))
    t = refract(i, (0.0, 0.0, 1.0), 1.5)
    assert t != ZERO
    # Bends away from the normal on the way out
    assert t[0] > i[0]
    assert t[2] > 0

# --- Output conversion ---

def test_clamp01():
    assert clamp01(-0.5) == 0.0
    assert clamp01(0.25) == 0.25
    assert clamp01(3.0) == 1.0

def test_to_byte():
    assert to_byte(-1.0) == 0
    assert to_byte(0.2) == 51
    assert to_byte(1.0) == 255
    assert to_byte(7.5) == 255
