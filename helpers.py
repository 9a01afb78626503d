# helpers.py
import logging
import os

from dotenv import load_dotenv

from vigenere_tools.alphabet import STANDARD_ALPHABET
from vigenere_tools.segmenter import load_segmenter

load_dotenv()

log = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def env_int(name, default):
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring %s=%r (not an integer), using %s", name, raw, default)
        return default


# ----- Configuration -----
DEFAULT_ALPHABET = (os.environ.get("KASISKI_ALPHABET") or STANDARD_ALPHABET).upper()
DICTIONARY_PATH = os.environ.get("KASISKI_DICTIONARY") or os.path.join(
    BASE_DIR, "frequency_dictionary_en_82_765.txt"
)
MIN_PATTERN_LEN = env_int("KASISKI_MIN_PATTERN", 3)
MAX_PATTERN_LEN = env_int("KASISKI_MAX_PATTERN", 8)
MAX_KEY_LENGTH = env_int("KASISKI_MAX_KEY_LENGTH", 20)
CANDIDATE_COUNT = env_int("KASISKI_CANDIDATES", 8)
TOP_RESULTS = env_int("KASISKI_TOP_RESULTS", 5)
FALLBACK_MAX = env_int("KASISKI_FALLBACK_MAX", 6)
ATTACK_TIMEOUT = env_int("KASISKI_ATTACK_TIMEOUT", 20)
MAX_CIPHERTEXT = env_int("KASISKI_MAX_CIPHERTEXT", 20000)
RATE_LIMIT_PER_MIN = env_int("KASISKI_RATE_LIMIT", 30)
LOG_LEVEL = (os.environ.get("LOG_LEVEL") or "INFO").upper()


_segmenters = {}


def get_segmenter(path=None):
    """Loaded once per dictionary path; NoSegmenter when the file is unusable."""
    path = path or DICTIONARY_PATH
    if path not in _segmenters:
        _segmenters[path] = load_segmenter(path)
    return _segmenters[path]
