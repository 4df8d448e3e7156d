import pytest

from ngram_from_scratch.tokenizer.tokenizer import split_words, tokenize_text
from ngram_from_scratch.vocabulary.vocabulary import Vocabulary


def test_training_mode_adds_words():
    vocab = Vocabulary()
    assert tokenize_text("one two three four five", vocab, training=True) == [0, 1, 2, 3, 4]
    assert vocab.decode(4) == "five"


def test_lowercases_and_collapses_whitespace():
    vocab = Vocabulary()
    tokens = tokenize_text("HELLO    World", vocab, training=True)
    assert [vocab.decode(t) for t in tokens] == ["hello", "world"]


def test_punctuation_stays_attached():
    assert split_words("hello, world!") == ["hello,", "world!"]


def test_repeated_words_share_an_id():
    tokens = tokenize_text("cat cat cat", Vocabulary(), training=True)
    assert tokens == [0, 0, 0]


def test_known_words_outside_training():
    vocab = Vocabulary()
    vocab.add("a")
    vocab.add("cat")
    assert tokenize_text("A Cat", vocab, training=False) == [0, 1]
    assert len(vocab) == 2


def test_unknown_word_outside_training_raises():
    with pytest.raises(ValueError, match="Unknown word: unknown"):
        tokenize_text("unknown", Vocabulary(), training=False)
