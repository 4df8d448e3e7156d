import random

import pytest

from ngram_from_scratch.language_model.language_model import (
    generate_text,
    generate_tokens,
    train_language_model,
)

TRAINING_DATA = [
    "A cat is on the mat",
    "A dog is in the park",
    "Birds can fly",
    "The sun rises in the east",
    "Computer has a keyboard",
]


def test_end_to_end_reaches_end_of_text():
    model = train_language_model(["a b c d"], 2, embedding_dimension=8, seed=0)
    assert generate_text(model, "a b", 2, 0.7) == "a b c d"
    # no context continues "c d", so a larger budget changes nothing
    assert generate_text(model, "a b", 10, 0.7) == "a b c d"


def test_training_builds_vocabulary_counts_and_embeddings():
    model = train_language_model(["a b c d", "a b c e"], 2, embedding_dimension=4, seed=0)
    assert len(model.vocabulary) == 5
    # "a" -> 0, "b" -> 1, "c" -> 2
    assert dict(model.ngram_model.lookup([0, 1])) == {2: 2}
    assert len(model.embedding_layer) == 5
    assert model.embedding_layer.embedding_dimension == 4


def test_windows_do_not_cross_texts():
    model = train_language_model(["a b", "c d"], 1, embedding_dimension=4, seed=0)
    assert model.ngram_model.lookup([model.vocabulary.encode("b")]) is None


def test_prompt_longer_than_window_uses_last_tokens():
    model = train_language_model(["x y z w"], 2, embedding_dimension=4, seed=0)
    assert generate_text(model, "w x y", 1, 1.0) == "w x y z"


def test_short_prompt_generates_nothing():
    model = train_language_model(TRAINING_DATA, 3, embedding_dimension=4, seed=0)
    assert list(generate_tokens(model, "a cat", 5, 0.7)) == []


def test_prompt_casing_is_kept():
    model = train_language_model(TRAINING_DATA, 2, embedding_dimension=8, seed=0)
    out = generate_text(model, "A cat", 3, 0.7, rng=random.Random(0))
    assert out == "A cat is on the"


def test_generation_length_budget():
    model = train_language_model(["the cat the cat the cat the cat"], 1, embedding_dimension=4, seed=0)
    tokens = list(generate_tokens(model, "the", 3, 1.0, rng=random.Random(0)))
    assert len(tokens) == 3


def test_unknown_prompt_word_raises():
    model = train_language_model(TRAINING_DATA, 2, embedding_dimension=4, seed=0)
    with pytest.raises(ValueError, match="Unknown word: zebra"):
        generate_text(model, "a zebra", 3, 0.7)


def test_attention_does_not_change_predictions():
    texts = ["a b c a b d a b e a b c", "b c a b d b e"]
    with_attention = train_language_model(texts, 2, embedding_dimension=8, attention_layer_count=4, seed=0)
    without_attention = train_language_model(texts, 2, embedding_dimension=8, attention_layer_count=0, seed=0)
    first = generate_text(with_attention, "a b", 10, 1.0, top_p=None, rng=random.Random(7))
    second = generate_text(without_attention, "a b", 10, 1.0, top_p=None, rng=random.Random(7))
    assert first == second
