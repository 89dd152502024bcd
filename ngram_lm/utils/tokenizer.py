# Start-of-sentence and end-of-sentence sentinels
SOS = "__sos__"
EOS = "__eos__"
MARKERS = (SOS, EOS)


def tokenize(text):
    """Splits text on runs of whitespace. No case or punctuation normalization."""
    return text.split()


def add_start(tokens):
    """Returns a new list with the SOS token prepended."""
    return [SOS] + list(tokens)


def add_end(tokens):
    """Returns a new list with the EOS token appended."""
    return list(tokens) + [EOS]


def mark(tokens):
    return add_start(add_end(tokens))


def detokenize(tokens, drop_markers=True):
    """
    Joins tokens back into a single string.

    Args:
        tokens (list of str): tokens, possibly including sentinels
        drop_markers (bool): if True, SOS/EOS are left out of the output
    Returns:
        str: space separated text
    """
    if drop_markers:
        tokens = [t for t in tokens if t not in MARKERS]
    return " ".join(tokens)
