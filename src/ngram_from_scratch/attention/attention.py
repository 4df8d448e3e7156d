"""
Scaled dot-product self-attention (NumPy)
-----------------------------------------
Parameter-free attention over a sequence of embeddings: queries, keys and
values are the embeddings themselves, there are no learned projections.

Shapes:
    embeddings: (N, D)
    weights:    (N, N)  row-wise softmax of E @ E^T / sqrt(D)
    output:     (N, D)  weights @ E

The language model runs this on every generation step for illustration only.
Its output is not used to pick the next token.
"""

import numpy as np
from scipy import special


def softmax(scores, axis=-1):
    """
    Numerically stable softmax (max is subtracted before exponentiating).

    Args:
        scores: array-like of finite scores
        axis: axis along which the probabilities sum to 1

    Returns:
        ndarray of the same shape; empty input gives an empty array.
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        return scores.copy()
    return special.softmax(scores, axis=axis)


def scaled_self_attention_weights(embeddings):
    """(N, N) attention matrix, every row is a probability distribution."""
    embeddings = np.asarray(embeddings, dtype=float)
    if embeddings.shape[0] == 0:
        return np.empty((0, 0))

    embedding_dim = embeddings.shape[-1]
    # scaling of dot product attention
    scores = embeddings @ embeddings.T / np.sqrt(embedding_dim)
    return softmax(scores, axis=-1)


def apply_weights(embeddings, weights):
    """Weighted sum of positions: (N, N) @ (N, D) -> (N, D)."""
    embeddings = np.asarray(embeddings, dtype=float)
    if embeddings.shape[0] == 0:
        return np.empty_like(embeddings)
    return np.asarray(weights, dtype=float) @ embeddings


def self_attention(embeddings):
    return apply_weights(embeddings, scaled_self_attention_weights(embeddings))


def multi_layer_with_residual(embeddings, layer_count):
    """
    Stack `layer_count` attention layers with skip connections:
    x = x + attention(x) per layer.

    Returns a new array; the input is never modified.
    """
    if layer_count < 0:
        raise ValueError(f"layer_count must be >= 0, got {layer_count}")

    x = np.array(embeddings, dtype=float)
    for _ in range(layer_count):
        x = x + self_attention(x)
    return x
