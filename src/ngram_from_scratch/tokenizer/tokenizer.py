"""
Word-level tokenizer
--------------------
Lowercases the text, splits it on whitespace and maps every word to a token id
through a Vocabulary. Punctuation stays attached to its word ("hello," is a
different word from "hello").
"""

from typing import List

from tokenizers import normalizers, pre_tokenizers

from ngram_from_scratch.vocabulary.vocabulary import Vocabulary

NORMALIZER = normalizers.Lowercase()
PRE_TOKENIZER = pre_tokenizers.WhitespaceSplit()


def split_words(text: str) -> List[str]:
    """Normalize and split text into words (no empty words)."""
    normalized = NORMALIZER.normalize_str(text)
    return [word for word, _ in PRE_TOKENIZER.pre_tokenize_str(normalized)]


def tokenize_text(text: str, vocabulary: Vocabulary, training: bool) -> List[int]:
    """
    Convert text into token ids.

    Args:
        text: raw input text
        vocabulary: word <-> id map, grown in place when training is True
        training: add unseen words instead of rejecting them

    Returns:
        List of token ids, one per word.

    Raises:
        ValueError: an unseen word was met outside training mode.
    """
    token_ids: List[int] = []
    for word in split_words(text):
        if training:
            token_ids.append(vocabulary.add(word))
            continue

        token_id = vocabulary.encode(word)
        if token_id is None:
            raise ValueError(f"Unknown word: {word}")
        token_ids.append(token_id)
    return token_ids
