"""
Word-level n-gram language model
--------------------------------
Training:   text -> tokens -> (context, next) samples -> n-gram counts
Generation: prompt -> last W tokens -> {attention (illustrative), lookup, sample} -> slide window

The multi-layer attention pass runs on every step but its output is discarded:
the next token comes from the n-gram counts alone.
"""

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

import numpy as np

from ngram_from_scratch.attention.attention import multi_layer_with_residual
from ngram_from_scratch.classic_ngram.classic_ngram import NGramLM, build_training_samples
from ngram_from_scratch.classic_ngram.sampling import sample_next_token
from ngram_from_scratch.config import (
    DEFAULT_ATTENTION_LAYERS,
    DEFAULT_EMBEDDING_DIMENSION,
    DEFAULT_TOP_P,
)
from ngram_from_scratch.embeddings.embeddings import EmbeddingLayer
from ngram_from_scratch.tokenizer.tokenizer import tokenize_text
from ngram_from_scratch.vocabulary.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


@dataclass
class LanguageModel:
    attention_layer_count: int
    context_window_size: int
    embedding_layer: EmbeddingLayer
    ngram_model: NGramLM
    vocabulary: Vocabulary


def train_language_model(
    texts: Iterable[str],
    context_window_size: int,
    embedding_dimension: int = DEFAULT_EMBEDDING_DIMENSION,
    attention_layer_count: int = DEFAULT_ATTENTION_LAYERS,
    seed: Optional[int] = None,
) -> LanguageModel:
    """
    Build a language model from raw texts in a single pass.

    Args:
        texts: training documents; context windows never cross two documents
        context_window_size: number of preceding words used as context
        embedding_dimension: size of the (random, untrained) token embeddings
        attention_layer_count: residual attention layers run during generation
        seed: seed for the embedding generator

    Returns:
        LanguageModel ready for generation.
    """
    vocabulary = Vocabulary()
    ngram_model = NGramLM(context_window_size)
    embedding_layer = EmbeddingLayer(embedding_dimension, rng=np.random.default_rng(seed))

    n_texts = 0
    n_samples = 0
    for text in texts:
        samples = build_training_samples(tokenize_text(text, vocabulary, training=True), context_window_size)
        ngram_model.train(samples)

        for ctx, nxt in samples:
            for token_id in ctx:
                embedding_layer.initialize_token_embedding(token_id)
            embedding_layer.initialize_token_embedding(nxt)

        n_texts += 1
        n_samples += len(samples)

    logger.info(
        f"Trained {context_window_size}-word context model: {n_texts} texts, "
        f"{n_samples} samples, {len(ngram_model)} contexts, vocab={len(vocabulary)}"
    )

    return LanguageModel(
        attention_layer_count=attention_layer_count,
        context_window_size=context_window_size,
        embedding_layer=embedding_layer,
        ngram_model=ngram_model,
        vocabulary=vocabulary,
    )


def generate_tokens(
    model: LanguageModel,
    prompt: str,
    generation_length: int,
    temperature: float,
    top_p: Optional[float] = DEFAULT_TOP_P,
    rng: Optional[random.Random] = None,
) -> Iterator[int]:
    """Yield up to `generation_length` tokens continuing the prompt.

    Stops early when the current context was never seen in training.
    Raises ValueError if the prompt contains a word outside the vocabulary.
    """
    prompt_tokens = tokenize_text(prompt, model.vocabulary, training=False)
    context = prompt_tokens[-model.context_window_size:]

    for step in range(generation_length):
        context_embeddings = model.embedding_layer.embeddings_for_sequence(context)
        contextual = multi_layer_with_residual(context_embeddings, model.attention_layer_count)
        logger.debug(f"step {step}: attention output shape={contextual.shape} (not used for sampling)")

        distribution = model.ngram_model.lookup(context)
        if distribution is None:
            logger.debug(f"step {step}: unseen context {tuple(context)}, stopping")
            break

        next_token = sample_next_token(distribution, temperature, top_p, rng)
        if next_token is None:
            break

        yield next_token
        context = context[1:] + [next_token]


def generate_text(
    model: LanguageModel,
    prompt: str,
    generation_length: int,
    temperature: float,
    top_p: Optional[float] = DEFAULT_TOP_P,
    rng: Optional[random.Random] = None,
) -> str:
    """Prompt words (as typed) followed by the generated words."""
    generated = generate_tokens(model, prompt, generation_length, temperature, top_p, rng)
    output_words: List[str] = prompt.split()
    output_words += [model.vocabulary.decode(token_id) for token_id in generated]
    return " ".join(output_words)
