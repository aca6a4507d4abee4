from __future__ import annotations

import random
from collections import Counter
from collections.abc import Iterable


class TrieNode:
    __slots__ = ("letter", "children", "is_word")

    def __init__(self, letter: str = ""):
        self.letter = letter
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Trie:
    def __init__(self):
        self.root = TrieNode()
        self._size = 0

    def insert(self, word: str):
        if not word:
            return
        node = self.root
        for ch in word.upper():
            if ch not in node.children:
                node.children[ch] = TrieNode(ch)
            node = node.children[ch]
        if not node.is_word:
            node.is_word = True
            self._size += 1

    def has(self, word: str) -> bool:
        node = self.root
        for ch in word.upper():
            node = node.children.get(ch)
            if node is None:
                return False
        return node is not self.root and node.is_word

    def __contains__(self, word: str) -> bool:
        return self.has(word)

    def __len__(self) -> int:
        return self._size

    def make_words(self, letters: str, shuffle: bool = False, rng: random.Random | None = None) -> list[str]:
        """Return every stored word that can be spelled from the letter bag.

        Each letter is used at most as many times as it occurs in ``letters``.
        Without ``shuffle`` the order follows child insertion order (depth first,
        shorter word before its extensions); with it the list is permuted by ``rng``.
        """
        supply = Counter(letters.upper())
        results: list[str] = []

        def dfs(node: TrieNode, path: list[str]):
            if path and node.is_word:
                results.append("".join(path))

            for letter, child in node.children.items():
                if supply[letter] > 0:
                    supply[letter] -= 1
                    path.append(letter)
                    dfs(child, path)
                    path.pop()
                    supply[letter] += 1

        if supply:
            dfs(self.root, [])
        if shuffle:
            (rng if rng is not None else random).shuffle(results)
        return results


def build_trie(words: Iterable[str]) -> Trie:
    trie = Trie()
    for word in words:
        trie.insert(word)
    return trie


def load_trie(path: str, min_length: int = 2) -> Trie:
    trie = Trie()
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip().upper()
            if len(word) >= min_length and word.isalpha():
                trie.insert(word)
    return trie
