import math
import random

import pytest

from vigenere_tools.scoring import Scorer

ENGLISH = (
    "the house stood at the end of the road and it was the last one before the forest "
    "that covered the hills to the north of the town"
)


@pytest.fixture
def scorer():
    return Scorer()


def test_english_beats_random_letters(scorer):
    rng = random.Random(7)
    noise = "".join(rng.choice("ABCDEFGHIJKLMNOPQRSTUVWXYZ") for _ in ENGLISH)
    assert scorer.score(ENGLISH) > scorer.score(noise)


def test_score_components(scorer):
    text = "THE cat, AND the dog; a I"
    assert scorer.common_word_hits(text) == 3
    expected = -scorer.chi_square(text) + 3 * 20.0 + text.count(" ") / 5.0
    assert scorer.score(text) == pytest.approx(expected)


def test_partial_score_damps_short_samples(scorer):
    short = "ETAOE"
    long = short * 5
    assert scorer.chi_square(long) == pytest.approx(5 * scorer.chi_square(short))
    assert scorer.score_partial(short) == pytest.approx(-scorer.chi_square(short) * 0.25)
    assert scorer.score_partial(long) == pytest.approx(-scorer.chi_square(long))


def test_chi_square_is_case_insensitive(scorer):
    assert scorer.chi_square("Hello World") == pytest.approx(scorer.chi_square("HELLOWORLD"))


@pytest.mark.parametrize("text", ["", "1234 !?", "   "])
def test_non_alphabetic_text_gets_worst_score(scorer, text):
    assert scorer.chi_square(text) == math.inf
    assert scorer.score(text) == -math.inf
    assert scorer.score_partial(text) == -math.inf


def test_custom_tables():
    scorer = Scorer(common_words={"cat"})
    assert scorer.common_word_hits("the cat sat") == 1
