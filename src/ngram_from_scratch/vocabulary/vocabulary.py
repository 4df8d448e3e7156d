from typing import Dict, Optional


class Vocabulary:
    """Append-only word <-> token id map. Ids are assigned in first-seen order."""

    def __init__(self):
        # word -> id
        self.word_to_id: Dict[str, int] = {}
        # id -> word
        self.id_to_word: Dict[int, str] = {}

    def add(self, word: str) -> int:
        if word not in self.word_to_id:
            token_id = len(self.word_to_id)
            self.word_to_id[word] = token_id
            self.id_to_word[token_id] = word
        return self.word_to_id[word]

    def encode(self, word: str) -> Optional[int]:
        return self.word_to_id.get(word)

    def decode(self, token_id: int) -> str:
        word = self.id_to_word.get(token_id)
        if word is None:
            raise ValueError(f"Unknown token: {token_id}")
        return word

    def __len__(self) -> int:
        return len(self.word_to_id)

    def __contains__(self, word: str) -> bool:
        return word in self.word_to_id
