"""
vigenere.py — Vigenère breaker (Kasiski + frequency analysis + local tweaks)
----------------------------------------------------------------------------
For each candidate key length every column is solved as a Caesar cipher by
chi-square, then each key letter is nudged one step either way to catch the
columns the independent solve got wrong. Candidates are ranked by the
English-likeness of their (optionally segmented) plaintext.
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import List, Optional

from vigenere_tools.alphabet import STANDARD_ALPHABET, as_alphabet
from vigenere_tools.encoders import caesar_shift, decrypt
from vigenere_tools.kasiski import estimate_key_lengths, extract_alphabet_only, find_repeats
from vigenere_tools.scoring import Scorer
from vigenere_tools.segmenter import NoSegmenter

log = logging.getLogger(__name__)

# best single-letter variants kept per candidate length
LOCAL_KEEP = 3
# upper bound of the 1..N range tried when Kasiski finds nothing
FALLBACK_CAP = 12


@dataclass(frozen=True)
class AttackResult:
    key: str
    plaintext: str
    segmented: Optional[str]
    score: float

    @property
    def readable(self) -> str:
        return self.segmented if self.segmented is not None else self.plaintext

    def to_dict(self):
        return {
            "key": self.key,
            "plaintext": self.plaintext,
            "segmented": self.segmented,
            "score": round(self.score, 3) if math.isfinite(self.score) else None,
        }


class CancellationSignal:
    """
    Cooperative cancellation for attack_using_kasiski. Cancelled once
    cancel() is called or, when a timeout is given, once it runs out.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self):
        self._event.set()

    def is_cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        return False


class AttackCancelled(Exception):
    """Raised between candidate lengths; carries what finished before it."""

    def __init__(self, results, completed_lengths):
        super().__init__(f"attack cancelled after {len(completed_lengths)} candidate length(s)")
        self.results = results
        self.completed_lengths = completed_lengths


def fallback_key_lengths(max_len: int = 6) -> List[int]:
    if max_len < 1:
        max_len = 6
    return list(range(1, min(FALLBACK_CAP, max_len) + 1))


def recover_key(projected: str, key_length: int, alphabet, scorer: Scorer) -> str:
    """Solve each column (every key_length-th letter) as its own Caesar shift."""
    alphabet = as_alphabet(alphabet)
    if key_length < 1 or not len(alphabet):
        return ""

    key = []
    for pos in range(key_length):
        column = projected[pos::key_length]
        best_score = -math.inf
        best_shift = 0
        for shift in range(len(alphabet)):
            s = scorer.score_partial(caesar_shift(column, shift, alphabet))
            # strict: lowest shift wins ties, -inf never beats the default
            if s > best_score:
                best_score = s
                best_shift = shift
        key.append(alphabet[best_shift])
    return "".join(key)


def neighbour_keys(key: str, alphabet):
    """Every key differing from `key` by one step (+/-1) at a single position."""
    alphabet = as_alphabet(alphabet)
    size = len(alphabet)
    for pos, ch in enumerate(key):
        cur = alphabet.index(ch) or 0
        for delta in (-1, 1):
            yield key[:pos] + alphabet[(cur + delta) % size] + key[pos + 1:]


class VigenereSolver:
    def __init__(self, ciphertext: str, alphabet=STANDARD_ALPHABET, segmenter=None, scorer=None):
        self.ciphertext = ciphertext
        self.alphabet = as_alphabet(alphabet)
        self.segmenter = segmenter if segmenter is not None else NoSegmenter()
        self.scorer = scorer if scorer is not None else Scorer()

    def decrypt_with_key(self, key: str) -> str:
        return decrypt(self.ciphertext, key, self.alphabet)

    def extract_alphabet_letters(self):
        return extract_alphabet_only(self.ciphertext, self.alphabet)

    def find_repeated_patterns(self, min_len: int = 3, max_len: int = 8):
        letters, _ = self.extract_alphabet_letters()
        return find_repeats(letters, min_len, max_len)

    def estimate_key_lengths(self, repeats, max_key_len: int = 30, top_n: int = 5):
        return estimate_key_lengths(repeats, max_key_len, top_n)

    def analyze_key_for_length(self, key_length: int) -> str:
        letters, _ = self.extract_alphabet_letters()
        return recover_key(letters, key_length, self.alphabet, self.scorer)

    def score_and_segment(self, key: str) -> AttackResult:
        raw = self.decrypt_with_key(key)
        segmented = self.segmenter.segment(raw)
        score = self.scorer.score(segmented if segmented is not None else raw)
        return AttackResult(key=key, plaintext=raw, segmented=segmented, score=score)

    def attack_using_kasiski(self, candidate_lengths, top_results: int = 5,
                             cancel: Optional[CancellationSignal] = None,
                             local_keep: int = LOCAL_KEEP) -> List[AttackResult]:
        """
        Break the ciphertext for each candidate key length, in order.

        Raises AttackCancelled (with the ranked results of every length that
        fully finished) when `cancel` fires; it is only checked before each
        candidate length starts.
        """
        cancel = cancel or CancellationSignal()
        results = []
        tried = set()
        completed = []

        if cancel.is_cancelled():
            log.warning("Attack cancelled before it started")
            raise AttackCancelled([], [])

        for length in candidate_lengths:
            if cancel.is_cancelled():
                log.warning("Attack cancelled before key length %s", length)
                raise AttackCancelled(_rank(results, top_results), completed)

            if length < 1:
                log.warning("Skipping invalid candidate key length %s", length)
                continue

            log.info("Analyzing candidate key length = %d", length)
            found = []

            key = self.analyze_key_for_length(length)
            if key.upper() not in tried:
                tried.add(key.upper())
                found.append(self.score_and_segment(key))

            # quick local tweaks (+/-1 shift per position)
            locals_ = []
            for cand in neighbour_keys(key, self.alphabet):
                if cand.upper() in tried:
                    continue
                tried.add(cand.upper())
                locals_.append(self.score_and_segment(cand))
            found.extend(_rank(locals_, local_keep))

            results.extend(found)
            completed.append(length)

        return _rank(results, top_results)


def _rank(results, limit):
    # sorted() is stable, so equal scores keep the order they were found in
    return sorted(results, key=lambda r: r.score, reverse=True)[:limit]
