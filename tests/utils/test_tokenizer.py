from ngram_lm.utils.tokenizer import EOS, SOS, add_end, add_start, detokenize, mark, tokenize


def test_tokenize_splits_on_whitespace_runs():
    assert tokenize("  The quick\tbrown\n\nfox  ") == ["The", "quick", "brown", "fox"]


def test_tokenize_keeps_case_and_punctuation():
    assert tokenize("Hello, World!") == ["Hello,", "World!"]


def test_tokenize_empty():
    assert tokenize("") == []
    assert tokenize("   ") == []


def test_markers_do_not_mutate_input():
    tokens = ["a", "b"]
    assert add_start(tokens) == [SOS, "a", "b"]
    assert add_end(tokens) == ["a", "b", EOS]
    assert tokens == ["a", "b"]


def test_mark():
    assert mark(["a"]) == [SOS, "a", EOS]
    assert mark([]) == [SOS, EOS]


def test_detokenize():
    tokens = [SOS, "the", "cat", EOS]
    assert detokenize(tokens) == "the cat"
    assert detokenize(tokens, drop_markers=False) == f"{SOS} the cat {EOS}"
