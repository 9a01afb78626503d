"""
segmenter.py — Word segmentation for readable plaintexts
--------------------------------------------------------
Puts spaces back into run-on decryptions using a word-frequency dictionary
("term count" per line, e.g. frequency_dictionary_en_82_765.txt).
Only whitespace is ever changed; anything else returns the input untouched.
"""

import logging
import math
import os
import re
import string

log = logging.getLogger(__name__)

MAX_WORD_LENGTH = 30

_WHITESPACE = re.compile(r"(\s+)")
_LETTER_RUNS = re.compile(r"[A-Za-z]+|[^A-Za-z]+")


class NoSegmenter:
    """Segmentation disabled: the raw decryption is what gets scored."""

    enabled = False

    def segment(self, text):
        return None


class DictionarySegmenter:
    """
    Maximum-probability split of each letter run, no spelling correction.
    Unknown words are charged 10 / (N * 10^len) like SymSpell does, so long
    unknown runs lose to any plausible split.
    """

    enabled = True

    def __init__(self, frequencies: dict, max_word_length: int = MAX_WORD_LENGTH):
        self.counts = {w.lower(): int(c) for w, c in frequencies.items() if int(c) > 0}
        self.total = sum(self.counts.values()) or 1
        self.max_word_length = max_word_length
        self._log_total = math.log10(self.total)

    def __len__(self):
        return len(self.counts)

    @classmethod
    def from_file(cls, path, term_index=0, count_index=1, encoding="utf-8"):
        frequencies = {}
        with open(path, encoding=encoding) as f:
            for line in f:
                parts = line.split()
                if len(parts) <= max(term_index, count_index):
                    continue
                try:
                    count = int(parts[count_index])
                except ValueError:
                    continue
                term = parts[term_index].lower()
                frequencies[term] = frequencies.get(term, 0) + count

        if not frequencies:
            raise ValueError(f"no dictionary terms in {path}")
        return cls(frequencies)

    def word_log_prob(self, word: str) -> float:
        count = self.counts.get(word.lower())
        if count:
            return math.log10(count) - self._log_total
        return 1.0 - self._log_total - len(word)

    def split_run(self, run: str):
        """Best split of a single letters-only run into words."""
        n = len(run)
        best = [0.0] + [-math.inf] * n
        back = [0] * (n + 1)
        for i in range(1, n + 1):
            for j in range(max(0, i - self.max_word_length), i):
                if best[j] == -math.inf:
                    continue
                p = best[j] + self.word_log_prob(run[j:i])
                if p > best[i]:
                    best[i] = p
                    back[i] = j

        words = []
        i = n
        while i > 0:
            j = back[i]
            words.append(run[j:i])
            i = j
        words.reverse()
        return words

    def _segment_chunk(self, chunk):
        # letter runs get split, punctuation stays glued to its neighbours
        out = []
        for piece in _LETTER_RUNS.findall(chunk):
            if piece[0] in string.ascii_letters:
                out.append(" ".join(self.split_run(piece)))
            else:
                out.append(piece)
        return "".join(out)

    def segment(self, text):
        if not text:
            return text

        segmented = "".join(
            part if part.isspace() else self._segment_chunk(part)
            for part in _WHITESPACE.split(text)
        )

        # never hand back anything but a whitespace edit of the input
        if re.sub(r"\s+", "", segmented) != re.sub(r"\s+", "", text):
            return text
        return segmented


def load_segmenter(path):
    """DictionarySegmenter for `path`, or NoSegmenter when it cannot be loaded."""
    if not path or not os.path.isfile(path):
        log.warning("[WordSegmentation] Dictionary not found: %s. Segmentation disabled.", path)
        return NoSegmenter()
    try:
        segmenter = DictionarySegmenter.from_file(path)
    except (OSError, ValueError) as e:
        log.warning("[WordSegmentation] Failed to load dictionary %s: %s", path, e)
        return NoSegmenter()

    log.info("[WordSegmentation] Dictionary loaded (%d terms), autocorrect disabled.", len(segmenter))
    return segmenter
