from typing import Dict, Iterable, Optional

import numpy as np


def normalize_to_unit_length(vector: np.ndarray) -> np.ndarray:
    """Scale a vector to L2 norm 1. The zero vector is returned unchanged."""
    magnitude = np.linalg.norm(vector)
    if magnitude == 0:
        return vector
    return vector / magnitude


class EmbeddingLayer:
    """
    Lazily initialized table of random unit vectors, one per token id.

    Nothing here is learned: a vector is drawn once from U[-1, 1), normalized,
    cached and never changed afterwards.
    """

    def __init__(self, embedding_dimension: int, rng: Optional[np.random.Generator] = None):
        if embedding_dimension < 1:
            raise ValueError(f"embedding_dimension must be >= 1, got {embedding_dimension}")
        self.embedding_dimension = embedding_dimension
        self.rng = rng if rng is not None else np.random.default_rng()
        self.token_embeddings: Dict[int, np.ndarray] = {}

    def initialize_token_embedding(self, token_id: int) -> None:
        if token_id in self.token_embeddings:
            return
        random_vector = self.rng.uniform(-1.0, 1.0, size=self.embedding_dimension)
        embedding = normalize_to_unit_length(random_vector)
        # cached vectors are shared with callers, keep them immutable
        embedding.flags.writeable = False
        self.token_embeddings[token_id] = embedding

    def embedding_for_token(self, token_id: int) -> np.ndarray:
        self.initialize_token_embedding(token_id)
        return self.token_embeddings[token_id]

    def embeddings_for_sequence(self, token_ids: Iterable[int]) -> np.ndarray:
        """Stack the embeddings of a token sequence into an (N, D) array."""
        vectors = [self.embedding_for_token(token_id) for token_id in token_ids]
        if not vectors:
            return np.empty((0, self.embedding_dimension))
        return np.stack(vectors)

    def __len__(self) -> int:
        return len(self.token_embeddings)
