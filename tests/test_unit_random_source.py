from observable_app.api import draw_success
from observable_app.random_source import NumpyRandomSource


def test_draws_stay_in_range():
    rng = NumpyRandomSource(seed=1)
    for _ in range(1000):
        assert 0.0 <= rng.random() < 1.0
        v = rng.integers(0, 100)
        assert isinstance(v, int)
        assert 0 <= v < 100


def test_seeded_sources_repeat():
    a = NumpyRandomSource(seed=123)
    b = NumpyRandomSource(seed=123)
    assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]


def test_success_ratio_converges_to_half():
    rng = NumpyRandomSource(seed=2024)
    n = 10_000
    successes = sum(draw_success(rng) for _ in range(n))
    assert abs(successes / n - 0.5) < 0.03
