import pytest
from ngram_lm.models.configs.configs import NgramConfig
from ngram_lm.models.ngrams.model import NGram, n_grams
from ngram_lm.utils.tokenizer import EOS, SOS


class FirstChooser:
    """Deterministic stand-in for the random chooser: always the top ranked candidate."""

    def __init__(self):
        self.seen = []

    def choose(self, candidates):
        self.seen.append(list(candidates))
        return candidates[0]


# This fixture provides a consistent, simple bigram model for all tests in this file.


@pytest.fixture
def bigram_model():
    """A bigram model trained on a single marked sentence."""
    model = NGram(NgramConfig(context_size=1), chooser=FirstChooser())
    model.train([[SOS, "the", "cat", "sat", EOS]])
    return model


@pytest.fixture
def trigram_model():
    corpus = [
        [SOS, "a", "b", "c", EOS],
        [SOS, "a", "b", "d", EOS],
        [SOS, "x", "b", "c", EOS],
    ]
    model = NGram(NgramConfig(context_size=2), chooser=FirstChooser())
    model.train(corpus)
    return model


def test_ngram_creation():
    """
    Tests if the extractor pairs each window's prefix with the following token.
    """
    # ACT
    actual = n_grams(["Eat", "tasty", "cakes"], 2)

    # ASSERT
    assert actual == [(("Eat",), "tasty"), (("tasty",), "cakes")]


def test_ngram_creation_exact_window():
    assert n_grams(["a", "b", "c"], 3) == [(("a", "b"), "c")]


def test_ngram_creation_too_short_raises():
    with pytest.raises(ValueError):
        n_grams(["a", "b"], 3)


def test_ngram_creation_invalid_window_raises():
    with pytest.raises(ValueError):
        n_grams(["a", "b"], 0)


def test_frequency_counting(trigram_model):
    """
    Tests if the frequency counts for the stored contexts are correct.
    """
    assert trigram_model.counts(("a", "b")) == {"c": 1, "d": 1}
    assert trigram_model.counts((SOS, "a")) == {"b": 2}
    assert trigram_model.counts(("b", "c")) == {EOS: 2}
    assert trigram_model.counts(("zzz", "b")) is None
    assert all(1 <= len(context) <= 2 for context in trigram_model.ngram_dict)
    # 3 sentences x (3 trigrams + 4 bigrams)
    assert trigram_model.total_ngrams == 21


def test_lower_orders_are_counted(trigram_model):
    assert trigram_model.counts(("b",)) == {"c": 2, "d": 1}
    assert trigram_model.counts((SOS,)) == {"a": 2, "x": 1}


def test_training_is_additive(bigram_model):
    # ARRANGE
    before = bigram_model.counts(("the",))["cat"]

    # ACT
    bigram_model.train([[SOS, "the", "cat", EOS], [SOS, "the", "dog", EOS]])

    # ASSERT
    counts = bigram_model.counts(("the",))
    assert counts["cat"] == before + 1
    assert counts["dog"] == 1
    assert all(c >= 1 for cs in bigram_model.ngram_dict.values() for c in cs.values())


def test_failed_training_leaves_table_untouched(bigram_model):
    snapshot = {k: dict(v) for k, v in bigram_model.ngram_dict.items()}

    with pytest.raises(ValueError):
        bigram_model.train([[SOS, "the", "cat", EOS], ["lonely"]])

    assert {k: dict(v) for k, v in bigram_model.ngram_dict.items()} == snapshot


def test_reset_keeps_config(bigram_model):
    config = bigram_model.config
    bigram_model.reset()
    assert len(bigram_model) == 0
    assert bigram_model.config is config


def test_cut_keeps_most_recent_tokens(trigram_model):
    assert trigram_model.cut(["w", "x", "y", "z"]) == ("y", "z")
    assert trigram_model.cut(["z"]) == ("z",)
    assert trigram_model.cut([]) == ()


def test_predict_single_continuation(bigram_model):
    assert bigram_model.predict(["the"]) == "cat"


def test_predict_uses_only_recent_tokens(bigram_model):
    assert bigram_model.predict(["whatever", "comes", "before", "the"]) == "cat"


def test_predict_untrained_returns_eos():
    model = NGram(NgramConfig(context_size=3))
    assert model.predict(["any", "thing"]) == EOS
    assert model.predict([]) == EOS


def test_resolve_without_smoothing_needs_exact_match():
    model = NGram(NgramConfig(context_size=2, smoothing=False), chooser=FirstChooser())
    model.train([[SOS, "a", "b", "c", EOS]])

    assert model.resolve(["a", "b"]) == {"c": 1}
    assert model.resolve(["zzz", "b"]) is None
    assert model.predict(["zzz", "b"]) == EOS


def test_resolve_backs_off_to_shorter_context(trigram_model):
    # ('q', 'b') was never seen, ('b',) was
    assert trigram_model.resolve(["q", "b"]) == {"c": 2, "d": 1}


def test_resolve_without_any_match_returns_none(trigram_model):
    assert trigram_model.resolve(["q", "r"]) is None


def test_resolve_prefers_full_context(trigram_model):
    assert trigram_model.resolve(["x", "b"]) == {"c": 1}


def test_predict_with_smoothing_draws_from_shorter_context(trigram_model):
    # ACT
    token = trigram_model.predict(["q", "b"])

    # ASSERT
    assert token == "c"
    assert trigram_model.chooser.seen[-1] == ["c", "d"]


def test_predict_without_smoothing_never_backs_off():
    model = NGram(NgramConfig(context_size=2, smoothing=False), chooser=FirstChooser())
    model.train([[SOS, "a", "b", "c", EOS]])

    assert model.counts(("b",)) == {"c": 1}
    assert model.predict(["q", "b"]) == EOS
    assert model.chooser.seen == []


def test_ranking_and_sampling_fraction():
    model = NGram(NgramConfig(context_size=1, sampling_fraction=0.5), chooser=FirstChooser())
    model.train(
        [
            [SOS, "go", "a", EOS],
            [SOS, "go", "a", EOS],
            [SOS, "go", "a", EOS],
            [SOS, "go", "b", EOS],
            [SOS, "go", "b", EOS],
            [SOS, "go", "c", EOS],
            [SOS, "go", "d", EOS],
        ]
    )

    model.predict(["go"])

    # 4 candidates * 0.5 -> top 2, ties broken lexically
    assert model.chooser.seen[-1] == ["a", "b"]


def test_sampling_fraction_always_keeps_one_candidate():
    model = NGram(NgramConfig(context_size=1, sampling_fraction=0.01), chooser=FirstChooser())
    model.train([[SOS, "go", "a", EOS], [SOS, "go", "b", EOS], [SOS, "go", "b", EOS]])

    assert model.predict(["go"]) == "b"
    assert model.chooser.seen[-1] == ["b"]


def test_predict_stays_within_top_candidates():
    model = NGram(NgramConfig(context_size=1, sampling_fraction=0.5, seed=123))
    model.train([[SOS, "go", tok, EOS] for tok in ["a", "a", "a", "b", "b", "c", "d"]])

    draws = {model.predict(["go"]) for _ in range(50)}

    assert draws <= {"a", "b"}


def test_generate_stops_after_eos(bigram_model):
    # ACT
    tokens = bigram_model.generate([SOS, "the"], 10)

    # ASSERT
    assert tokens == [SOS, "the", "cat", "sat", EOS]


def test_generate_respects_max_steps():
    model = NGram(NgramConfig(context_size=1), chooser=FirstChooser())
    model.train([[SOS, "la", "la", "la", "la", EOS], [SOS, "la", "la", "la", EOS]])

    tokens = [SOS, "la"]
    returned = model.generate(tokens, 5)

    assert returned is tokens
    assert tokens == [SOS, "la", "la", "la", "la", "la", "la"]


def test_generate_on_untrained_model_appends_single_eos():
    model = NGram(NgramConfig(context_size=2))
    tokens = [SOS]
    model.generate(tokens, 10)
    assert tokens == [SOS, EOS]


def test_generate_zero_steps_is_noop(bigram_model):
    tokens = [SOS, "the"]
    bigram_model.generate(tokens, 0)
    assert tokens == [SOS, "the"]


def test_debug_mode_reports_steps(capsys):
    model = NGram(NgramConfig(context_size=1), enable_debug=True)
    model.train([[SOS, "a", EOS]])
    out = capsys.readouterr().out
    assert "[DEBUG]" in out
    assert "Populated ngram_dict" in out
    assert "Populated ngram_dict" in model.tracker.step_times


def test_vocab_and_membership(bigram_model):
    assert bigram_model.vocab == {"the", "cat", "sat", EOS}
    assert ["the"] in bigram_model
    assert ["dog"] not in bigram_model
    assert len(bigram_model) == 4


def test_short_prompt_without_smoothing_uses_its_exact_lower_order():
    # ARRANGE
    model = NGram(NgramConfig(context_size=2, smoothing=False), chooser=FirstChooser())
    model.train([[SOS, "a", "b", EOS]])

    # ACT / ASSERT
    # (SOS,) is stored as a lower order, so it is an exact match, not a backoff
    assert model.predict([SOS]) == "a"
    assert model.predict(["q", SOS]) == EOS
