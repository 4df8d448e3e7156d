from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple


class TrainingSample(NamedTuple):
    context: Tuple[int, ...]
    next_token: int


# ---------- Context samples ----------
def build_training_samples(token_sequence: Sequence[int], context_window_size: int) -> List[TrainingSample]:
    """Slide a window of `context_window_size` tokens over the sequence.

    A sequence of length L yields max(0, L - W) samples, in order:
    sample i has context S[i:i+W] and next token S[i+W].
    """
    if context_window_size < 1:
        raise ValueError(f"context_window_size must be >= 1, got {context_window_size}")

    tokens = list(token_sequence)
    samples: List[TrainingSample] = []
    for i in range(len(tokens) - context_window_size):
        ctx = tuple(tokens[i:i + context_window_size])
        samples.append(TrainingSample(ctx, tokens[i + context_window_size]))
    return samples


class NGramLM:
    """Classic fixed-order n-gram: exact-match counts of next tokens per context window."""

    def __init__(self, context_size: int):
        assert context_size >= 1
        self.context_size = context_size

        # context -> next_token -> count
        self.counts: Dict[Tuple[int, ...], Dict[int, int]] = {}
        # context -> total count
        self.totals: Dict[Tuple[int, ...], int] = {}

    def train(self, samples: Iterable[TrainingSample]) -> None:
        """Add one observation per sample. Counts accumulate across calls."""
        for ctx, nxt in samples:
            ctx = tuple(ctx)
            bucket = self.counts.setdefault(ctx, {})
            bucket[nxt] = bucket.get(nxt, 0) + 1
            self.totals[ctx] = self.totals.get(ctx, 0) + 1

    def update(self, stream: Sequence[int]) -> None:
        self.train(build_training_samples(stream, self.context_size))

    def lookup(self, ctx: Sequence[int]) -> Optional[Mapping[int, int]]:
        """Next-token counts for an exactly matching context, or None if it was never seen.

        The returned mapping is a read-only view in first-seen order.
        """
        bucket = self.counts.get(tuple(ctx))
        if bucket is None:
            return None
        return MappingProxyType(bucket)

    def probability(self, ctx: Sequence[int], nxt: int) -> float:
        """Maximum-likelihood P(nxt | ctx); 0.0 for anything unseen."""
        ctx = tuple(ctx)
        bucket = self.counts.get(ctx)
        if bucket is None:
            return 0.0
        return bucket.get(nxt, 0) / self.totals[ctx]

    def __len__(self) -> int:
        return len(self.counts)

    def __contains__(self, ctx: Sequence[int]) -> bool:
        return tuple(ctx) in self.counts
