from collections import Counter
from pathlib import Path

from ngram_lm.models.ngrams.sampler import UniformChooser, rank_candidates, top_k
from ngram_lm.utils.debugg_utils import Colors, ResourceTracker
from ngram_lm.utils.file_manager import read_json, write_json
from ngram_lm.utils.tokenizer import EOS

# Joins the tokens of a context into a single key in saved files.
# Tokens must never contain it.
CONTEXT_DELIMITER = "␟"


def n_grams(tokens, window_size):
    """
    Slides a window of `window_size` tokens over `tokens`.

    Each window becomes a (context, next_token) pair where the context is the
    tuple of the first `window_size - 1` tokens.

    >>> n_grams(["Eat", "tasty", "cakes"], 2)
    [(('Eat',), 'tasty'), (('tasty',), 'cakes')]

    Raises
    ------
    ValueError
        If `window_size` < 1 or there are fewer tokens than `window_size`.
    """
    if window_size < 1:
        raise ValueError(f"window_size must be >= 1, got {window_size}")
    tokens = list(tokens)
    if len(tokens) < window_size:
        raise ValueError(
            f"Need at least {window_size} tokens to build n-grams, got {len(tokens)}: {tokens}"
        )
    return [
        (tuple(tokens[i : i + window_size - 1]), tokens[i + window_size - 1])
        for i in range(len(tokens) - window_size + 1)
    ]


class NGram:
    def __init__(self, config, chooser=None, enable_debug=False):
        self.config = config
        self.chooser = chooser if chooser is not None else UniformChooser(config.seed)
        # context (tuple of tokens) -> Counter(next token -> count)
        self.ngram_dict = {}
        self.tracker = ResourceTracker(enabled=enable_debug)

    @property
    def context_size(self):
        return self.config.context_size

    @property
    def n(self):
        return self.config.context_size + 1

    def __len__(self):
        return len(self.ngram_dict)

    def __contains__(self, context):
        return tuple(context) in self.ngram_dict

    @property
    def vocab(self):
        """All tokens observed as a continuation."""
        return {token for counts in self.ngram_dict.values() for token in counts}

    @property
    def total_ngrams(self):
        return sum(sum(counts.values()) for counts in self.ngram_dict.values())

    def counts(self, context):
        """Exact lookup, no backoff. Returns None for unseen contexts."""
        return self.ngram_dict.get(tuple(context))

    def cut(self, tokens):
        """Keeps only the most recent `context_size` tokens."""
        tokens = tuple(tokens)
        return tokens[-self.context_size :]

    # ---------------- training ----------------

    def train(self, corpus):
        """
        Accumulate n-gram counts from a corpus of token sequences.

        Sequences must already carry their SOS/EOS markers. Counts are added to
        whatever the model already holds. Besides the full `context_size`
        contexts, every shorter order down to a single token is counted too, so
        that backoff has something to fall back on. Lower orders are stored
        keys like any other, so with smoothing disabled a prompt shorter than
        `context_size` still gets an exact match on them.

        Every sequence is split into n-grams before the table is touched, so a
        sequence shorter than `n` raises ValueError without changing the model.
        """
        self.tracker.step("Start training")
        extracted = []
        for tokens in corpus:
            tokens = list(tokens)
            extracted.extend(n_grams(tokens, self.n))
            for window_size in range(self.n - 1, 1, -1):
                extracted.extend(n_grams(tokens, window_size))
        self.tracker.step("Ngrams generation")

        for context, token in extracted:
            self.ngram_dict.setdefault(context, Counter())[token] += 1

        self.tracker.step("Populated ngram_dict")
        return self

    def reset(self):
        """Drops every learned count. The configuration is kept."""
        self.ngram_dict = {}

    # ---------------- inference ----------------

    def resolve(self, context):
        """
        Find the continuation counts for `context`.

        The context is cut to `context_size` tokens first. With smoothing enabled,
        unseen contexts are retried without their oldest token until a stored
        context matches or nothing is left. The first match is returned as is.
        """
        probe = self.cut(context)
        while True:
            counts = self.ngram_dict.get(probe)
            if counts is not None:
                return counts
            if not self.config.smoothing or not probe:
                return None
            probe = probe[1:]

    def predict(self, tokens):
        """
        Sample the next token for `tokens`.

        Candidates are ranked by count and one is drawn uniformly from the top
        `sampling_fraction` share of them. Returns EOS when no context matches.
        """
        counts = self.resolve(tokens)
        if not counts:
            return EOS
        ranked = rank_candidates(counts)
        k = top_k(len(ranked), self.config.sampling_fraction)
        return str(self.chooser.choose(ranked[:k]))

    def generate(self, tokens, max_steps):
        """
        Append up to `max_steps` predicted tokens to `tokens` in place.
        Stops right after an EOS has been appended. Returns `tokens`.
        """
        if max_steps < 0:
            raise ValueError(f"max_steps must be >= 0, got {max_steps}")
        for _ in range(max_steps):
            token = self.predict(tokens)
            tokens.append(token)
            if token == EOS:
                break
        return tokens

    # ---------------- persistence ----------------

    def to_pairs(self):
        """Table as a list of [encoded context, {token: count}] pairs."""
        pairs = []
        for context, counts in self.ngram_dict.items():
            for token in context:
                if CONTEXT_DELIMITER in token:
                    raise ValueError(
                        f"{Colors.FAIL}[FAIL]{Colors.ENDC} Token {token!r} contains the reserved "
                        f"context delimiter {CONTEXT_DELIMITER!r} and cannot be saved"
                    )
            pairs.append([CONTEXT_DELIMITER.join(context), dict(counts)])
        return pairs

    def _table_from_pairs(self, pairs):
        if not isinstance(pairs, list):
            raise ValueError(
                f"{Colors.FAIL}[FAIL]{Colors.ENDC} Expected a list of pairs, got {type(pairs).__name__}"
            )
        table = {}
        for idx, pair in enumerate(pairs):
            if not isinstance(pair, list) or len(pair) != 2:
                raise ValueError(f"{Colors.FAIL}[FAIL]{Colors.ENDC} Entry {idx} is not a [context, counts] pair")
            key, counts = pair
            if not isinstance(key, str):
                raise ValueError(f"{Colors.FAIL}[FAIL]{Colors.ENDC} Entry {idx}: context must be a string")
            if not isinstance(counts, dict) or not counts:
                raise ValueError(f"{Colors.FAIL}[FAIL]{Colors.ENDC} Entry {idx}: counts must be a non-empty mapping")

            context = tuple(key.split(CONTEXT_DELIMITER))
            if len(context) > self.context_size:
                raise ValueError(
                    f"{Colors.FAIL}[FAIL]{Colors.ENDC} Entry {idx}: context {context} has "
                    f"{len(context)} tokens, model allows at most {self.context_size}"
                )
            if context in table:
                raise ValueError(f"{Colors.FAIL}[FAIL]{Colors.ENDC} Entry {idx}: duplicate context {context}")

            for token, count in counts.items():
                if isinstance(count, bool) or not isinstance(count, int) or count < 1:
                    raise ValueError(
                        f"{Colors.FAIL}[FAIL]{Colors.ENDC} Entry {idx}: count for {token!r} must be "
                        f"a positive integer, got {count!r}"
                    )
            table[context] = Counter(counts)
        return table

    def save(self, path):
        """
        Write the table as a JSON list of [context, counts] pairs.

        Returns
        -------
        Path
            The written file.
        """
        path = write_json(path, self.to_pairs())
        self.tracker.step("Saved model")
        return path

    def load(self, path):
        """
        Replace the table with the one stored at `path`.

        The current table is only swapped out once the whole document has been
        validated, so a bad file leaves the model untouched.
        """
        table = self._table_from_pairs(read_json(Path(path)))
        self.ngram_dict = table
        self.tracker.step("Loaded model")
        return self
