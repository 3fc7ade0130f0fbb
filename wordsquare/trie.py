from __future__ import annotations

import logging
import string
from typing import Iterable

logger = logging.getLogger("wordsquare")

DEFAULT_ALPHABET = string.ascii_uppercase

ROOT = 0


class InvalidWord(ValueError):
    """Raised when a word is empty or uses symbols outside the alphabet."""


class _EndOfWord:
    __slots__ = ()

    def __repr__(self):
        return "END_OF_WORD"


END_OF_WORD = _EndOfWord()


class PrefixDictionary:
    """Trie of fixed-alphabet words stored as an arena of nodes.

    Node handles are list indices; handle 0 is the root (the empty prefix).
    Each node has a child map (symbol -> handle) and an end-of-word flag.
    Nodes are never removed.
    """

    __slots__ = ("alphabet", "_children", "_is_word", "_count", "_lengths")

    def __init__(self, alphabet: Iterable[str] = DEFAULT_ALPHABET):
        self.alphabet = frozenset(alphabet)
        self._children: list[dict[str, int]] = [{}]
        self._is_word: list[bool] = [False]
        self._count = 0
        self._lengths: set[int] = set()

    @classmethod
    def from_words(cls, words: Iterable[str], alphabet: Iterable[str] = DEFAULT_ALPHABET) -> PrefixDictionary:
        dictionary = cls(alphabet)
        for word in words:
            dictionary.insert(word)
        return dictionary

    def insert(self, word: str):
        if not word:
            raise InvalidWord("cannot insert an empty word")
        bad = set(word) - self.alphabet
        if bad:
            raise InvalidWord(f"{word!r} contains symbols outside the alphabet: {''.join(sorted(bad))}")

        node = ROOT
        for ch in word:
            child = self._children[node].get(ch)
            if child is None:
                child = len(self._children)
                self._children.append({})
                self._is_word.append(False)
                self._children[node][ch] = child
            node = child

        if not self._is_word[node]:
            self._is_word[node] = True
            self._count += 1
            self._lengths.add(len(word))

    def _find(self, prefix: Iterable[str]) -> int | None:
        node = ROOT
        for ch in prefix:
            node = self._children[node].get(ch)
            if node is None:
                return None
        return node

    def continuations(self, prefix: Iterable[str] = ()) -> tuple | None:
        """Return what may follow ``prefix``, or None if no stored word starts with it.

        The result holds single-character symbols in insertion order, preceded by
        END_OF_WORD when the prefix is itself a stored word. An empty dictionary
        has no stored prefixes at all, so even the empty prefix is absent there.
        """
        node = self._find(prefix)
        if node is None or not (self._children[node] or self._is_word[node]):
            return None
        symbols = tuple(self._children[node])
        if self._is_word[node]:
            return (END_OF_WORD,) + symbols
        return symbols

    def words_of_length(self, length: int) -> list[str]:
        """Return every stored word of exactly ``length`` symbols.

        Depth-first in child insertion order, so the result is stable for a
        given insertion history.
        """
        if length <= 0 or length not in self._lengths:
            return []

        words = []
        stack = [(ROOT, "")]
        while stack:
            node, path = stack.pop()
            if len(path) == length:
                if self._is_word[node]:
                    words.append(path)
                continue
            # Reversed so that popping visits children in insertion order
            for ch, child in reversed(self._children[node].items()):
                stack.append((child, path + ch))
        return words

    def restricted_to_length(self, length: int) -> PrefixDictionary:
        return type(self).from_words(self.words_of_length(length), self.alphabet)

    @property
    def lengths(self) -> frozenset[int]:
        return frozenset(self._lengths)

    def __contains__(self, word) -> bool:
        if not isinstance(word, str) or not word:
            return False
        node = self._find(word)
        return node is not None and self._is_word[node]

    def __len__(self) -> int:
        return self._count

    def __repr__(self):
        return f"PrefixDictionary(words={self._count}, nodes={len(self._children)})"


def load_dictionary(path: str, alphabet: str = DEFAULT_ALPHABET) -> PrefixDictionary:
    """Build a dictionary from a word list file, one word per line.

    Lines are stripped and upper-cased; blank lines, lines whose upper-case
    form changes length, and lines with symbols outside the alphabet are
    skipped.
    """
    dictionary = PrefixDictionary(alphabet)
    allowed = dictionary.alphabet
    skipped = 0
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            raw = line.strip()
            if not raw:
                continue
            word = raw.upper()
            # Some case mappings expand, e.g. "straße" -> "STRASSE"
            if len(word) != len(raw) or not allowed.issuperset(word):
                skipped += 1
                continue
            dictionary.insert(word)

    logger.debug("Loaded %d words from %s (skipped %d)", len(dictionary), path, skipped)
    return dictionary
