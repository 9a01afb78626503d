"""
scoring.py — English-likeness scoring
-------------------------------------
Chi-square against English letter frequencies, plus a light common-word and
space bonus for whole candidates. Higher is more English-like.
"""

import math
import re

# English letter frequencies (A–Z) as percentages
ENGLISH_FREQ = (
    8.167, 1.492, 2.782, 4.253, 12.702, 2.228, 2.015, 6.094, 6.966, 0.153,
    0.772, 4.025, 2.406, 6.749, 7.507, 1.929, 0.095, 5.987, 6.327, 9.056,
    2.758, 0.978, 2.360, 0.150, 1.974, 0.074,
)

COMMON_WORDS = frozenset({
    "THE", "BE", "TO", "OF", "AND", "A", "IN", "THAT", "HAVE", "I", "IT", "FOR",
    "NOT", "ON", "WITH", "HE", "AS", "YOU", "DO", "AT", "IS", "THIS", "BUT", "BY",
    "FROM",
})

_TOKEN_SPLIT = re.compile(r"[ ,.;:\t\r\n!?\-()\"]+")

WORD_BONUS = 20.0
SPACE_DIVISOR = 5.0
# subchannels shorter than this get proportionally damped scores
FULL_WEIGHT_LENGTH = 20.0


class Scorer:
    """Stateless scorer; the reference tables are fixed at construction."""

    def __init__(self, frequencies=ENGLISH_FREQ, common_words=COMMON_WORDS):
        self.frequencies = tuple(frequencies)
        self.common_words = frozenset(w.upper() for w in common_words)

    def score(self, text: str) -> float:
        chi = self.chi_square(text)
        if math.isinf(chi):
            return -math.inf
        words = self.common_word_hits(text) * WORD_BONUS
        spaces = text.count(" ") / SPACE_DIVISOR
        return -chi + words + spaces

    def score_partial(self, text: str) -> float:
        chi = self.chi_square(text)
        if math.isinf(chi):
            return -math.inf
        return -chi * min(1.0, len(text) / FULL_WEIGHT_LENGTH)

    def chi_square(self, text: str) -> float:
        """+inf when the text has no A–Z letters at all."""
        counts = [0] * 26
        total = 0
        for ch in text.upper():
            if "A" <= ch <= "Z":
                counts[ord(ch) - 65] += 1
                total += 1

        if total == 0:
            return math.inf

        chi = 0.0
        for obs, pct in zip(counts, self.frequencies):
            exp = pct * total / 100.0
            chi += ((obs - exp) ** 2) / (exp if exp > 0 else 1.0)
        return chi

    def common_word_hits(self, text: str) -> int:
        tokens = _TOKEN_SPLIT.split(text.upper())
        return sum(1 for t in tokens if len(t) > 1 and t in self.common_words)
