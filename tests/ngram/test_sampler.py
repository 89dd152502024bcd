import pytest
from collections import Counter
from ngram_lm.models.ngrams.sampler import UniformChooser, rank_candidates, top_k


def test_rank_candidates_by_count_then_token():
    counts = Counter({"b": 2, "a": 2, "z": 5, "c": 1})
    assert rank_candidates(counts) == ["z", "a", "b", "c"]


def test_rank_candidates_ignores_insertion_order():
    assert rank_candidates({"y": 1, "x": 1}) == rank_candidates({"x": 1, "y": 1})


@pytest.mark.parametrize(
    "num_candidates, fraction, expected",
    [
        (10, 1.0, 10),
        (10, 0.5, 5),
        (7, 0.5, 3),
        (3, 0.1, 1),
        (1, 1.0, 1),
    ],
)
def test_top_k(num_candidates, fraction, expected):
    assert top_k(num_candidates, fraction) == expected


def test_uniform_chooser_is_reproducible_with_seed():
    candidates = ["a", "b", "c", "d"]
    first = [UniformChooser(seed=7).choose(candidates) for _ in range(1)]
    chooser_a = UniformChooser(seed=7)
    chooser_b = UniformChooser(seed=7)

    draws_a = [chooser_a.choose(candidates) for _ in range(20)]
    draws_b = [chooser_b.choose(candidates) for _ in range(20)]

    assert draws_a == draws_b
    assert draws_a[0] == first[0]
    assert set(draws_a) <= set(candidates)


def test_uniform_chooser_covers_all_candidates():
    chooser = UniformChooser(seed=1)
    draws = {chooser.choose(["a", "b", "c"]) for _ in range(200)}
    assert draws == {"a", "b", "c"}


def test_uniform_chooser_empty_raises():
    with pytest.raises(ValueError):
        UniformChooser().choose([])
