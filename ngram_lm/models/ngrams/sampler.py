import math
import numpy as np


def rank_candidates(counts):
    """
    Orders continuation tokens by count, highest first.
    Equal counts are ordered lexically so the ranking does not depend on insertion order.
    """
    return [token for token, _ in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))]


def top_k(num_candidates, fraction):
    """Number of ranked candidates eligible for sampling. Never below 1."""
    return max(1, math.floor(num_candidates * fraction))


class UniformChooser:
    """Picks one element uniformly at random from a non-empty ordered sequence."""

    def __init__(self, seed=None):
        self.rng = np.random.default_rng(seed)

    def choose(self, candidates):
        if len(candidates) == 0:
            raise ValueError("Cannot choose from an empty sequence of candidates")
        return candidates[int(self.rng.integers(len(candidates)))]
