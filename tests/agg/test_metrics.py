import pytest

from mapty.agg import compute_pace, compute_speed


@pytest.mark.parametrize(
    "distance, duration, expected",
    [
        (5.0, 25.0, 5.0),
        (10.0, 42.5, 4.25),
        (0.4, 2.0, 5.0),
        (21.0975, 95.0, 95.0 / 21.0975),
    ],
)
def test_compute_pace(distance, duration, expected):
    assert compute_pace(distance, duration) == pytest.approx(expected)


@pytest.mark.parametrize(
    "distance, duration, expected",
    [
        (20.0, 60.0, 20.0),
        (15.0, 30.0, 30.0),
        (42.0, 90.0, 28.0),
        (7.5, 20.0, 22.5),
    ],
)
def test_compute_speed(distance, duration, expected):
    assert compute_speed(distance, duration) == pytest.approx(expected)


def test_metrics_are_plain_division():
    # No rounding: results match the straightforward expressions exactly.
    assert compute_pace(3.0, 17.0) == 17.0 / 3.0
    assert compute_speed(3.0, 17.0) == 3.0 / (17.0 / 60)
