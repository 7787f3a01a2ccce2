import pytest

from pathtracer.core.vector import BLACK, WHITE, Color, Vector3


def test_vector_arithmetic():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(-2.0, 0.5, 4.0)

    assert a + b == Vector3(-1.0, 2.5, 7.0)
    assert a - b == Vector3(3.0, 1.5, -1.0)
    assert -a == Vector3(-1.0, -2.0, -3.0)
    assert a * 2.0 == Vector3(2.0, 4.0, 6.0)
    assert 2.0 * a == Vector3(2.0, 4.0, 6.0)
    assert a.dot(b) == pytest.approx(-2.0 + 1.0 + 12.0)


def test_normalize_gives_unit_length():
    v = Vector3(3.0, -4.0, 12.0).normalize()
    assert v.length() == pytest.approx(1.0)
    assert v.x == pytest.approx(3.0 / 13.0)


def test_normalize_zero_vector_fails_fast():
    with pytest.raises(ValueError):
        Vector3(0.0, 0.0, 0.0).normalize()


def test_vectors_are_immutable():
    v = Vector3(1.0, 2.0, 3.0)
    with pytest.raises(AttributeError):
        v.x = 5.0


def test_color_operations():
    a = Color(0.5, 0.25, 2.0)
    b = Color(0.5, 4.0, 0.5)

    assert a + b == Color(1.0, 4.25, 2.5)
    assert a * b == Color(0.25, 1.0, 1.0)
    assert a * 2.0 == Color(1.0, 0.5, 4.0)
    assert 2.0 * a == Color(1.0, 0.5, 4.0)
    assert WHITE * a == a
    assert BLACK * a == BLACK


def test_color_clamps_without_tone_mapping():
    c = Color(1.5, -0.2, 0.5)
    assert c.clamped() == Color(1.0, 0.0, 0.5)
    assert c.to_rgb8() == (255, 0, 128)


def test_sky_constant_round_trips_to_8bit():
    sky = Color(10.0 / 255.0, 10.0 / 255.0, 20.0 / 255.0)
    assert sky.to_rgb8() == (10, 10, 20)
