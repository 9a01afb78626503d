import logging
import time
from collections import defaultdict, deque

from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest
from werkzeug.middleware.proxy_fix import ProxyFix

import helpers
from helpers import get_segmenter
from vigenere_tools.alphabet import build_keyed_alphabet
from vigenere_tools.encoders import encrypt
from vigenere_tools.kasiski import KEY_LENGTH_CEILING
from vigenere_tools.segmenter import NoSegmenter
from vigenere_tools.vigenere import (
    AttackCancelled,
    CancellationSignal,
    VigenereSolver,
    fallback_key_lengths,
)

MAX_REPEATS_SHOWN = 50

app = Flask(__name__)
app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

# ----- Configuration -----
app.config.update(
    DEFAULT_ALPHABET=helpers.DEFAULT_ALPHABET,
    DICTIONARY_PATH=helpers.DICTIONARY_PATH,
    MIN_PATTERN_LEN=helpers.MIN_PATTERN_LEN,
    MAX_PATTERN_LEN=helpers.MAX_PATTERN_LEN,
    MAX_KEY_LENGTH=helpers.MAX_KEY_LENGTH,
    CANDIDATE_COUNT=helpers.CANDIDATE_COUNT,
    TOP_RESULTS=helpers.TOP_RESULTS,
    FALLBACK_MAX=helpers.FALLBACK_MAX,
    ATTACK_TIMEOUT=helpers.ATTACK_TIMEOUT,
    MAX_CIPHERTEXT=helpers.MAX_CIPHERTEXT,
    RATE_LIMIT_PER_MIN=helpers.RATE_LIMIT_PER_MIN,
)

app.logger.setLevel(getattr(logging, helpers.LOG_LEVEL, logging.INFO))
logging.getLogger("vigenere_tools").setLevel(getattr(logging, helpers.LOG_LEVEL, logging.INFO))


# ip -> endpoint -> deque[timestamps]
_RATE = defaultdict(lambda: defaultdict(deque))


def rate_limit(key: str, limit: int, window_s: int):
    """
    key: e.g. "vigenere_attack"
    limit: requests allowed
    window_s: sliding window in seconds
    """
    ip = request.headers.get("CF-Connecting-IP") or request.remote_addr or "unknown"
    now = time.time()

    q = _RATE[ip][key]
    while q and q[0] <= now - window_s:
        q.popleft()

    if len(q) >= limit:
        return False, ip

    q.append(now)
    return True, ip


@app.after_request
def add_security_headers(resp):
    resp.headers["X-Content-Type-Options"] = "nosniff"
    resp.headers["X-Frame-Options"] = "DENY"
    resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    resp.headers["Content-Security-Policy"] = "default-src 'none'"
    return resp


@app.errorhandler(BadRequest)
def handle_bad_request(e):
    return jsonify({"ok": False, "error": e.description}), 400


# ------------------- Request parsing -------------------
def _payload():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Expected a JSON object body.")
    return data


def _int_field(data, name, default, lo=1, hi=KEY_LENGTH_CEILING):
    value = data.get(name)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise BadRequest(f"{name} must be an integer.")
    if not lo <= value <= hi:
        raise BadRequest(f"{name} must be between {lo} and {hi}.")
    return value


def _bool_field(data, name, default):
    value = data.get(name)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise BadRequest(f"{name} must be true or false.")
    return value


def _solver(data, segment=False, field="ciphertext"):
    text = data.get(field)
    if not isinstance(text, str) or not text.strip():
        raise BadRequest(f"{field} is required.")
    if len(text) > app.config["MAX_CIPHERTEXT"]:
        raise BadRequest(f"{field} is limited to {app.config['MAX_CIPHERTEXT']} characters.")

    base = data.get("alphabet") or app.config["DEFAULT_ALPHABET"]
    keyphrase = data.get("keyphrase") or ""
    if not isinstance(base, str) or not isinstance(keyphrase, str):
        raise BadRequest("alphabet and keyphrase must be strings.")

    alphabet = build_keyed_alphabet(base, keyphrase)
    if len(alphabet) < 2:
        raise BadRequest("alphabet needs at least two distinct symbols.")

    segmenter = get_segmenter(app.config["DICTIONARY_PATH"]) if segment else NoSegmenter()
    return VigenereSolver(text, alphabet, segmenter)


def _candidate_lengths(data):
    lengths = data.get("candidate_lengths")
    if lengths is None:
        return None
    if not isinstance(lengths, list) or len(lengths) > KEY_LENGTH_CEILING:
        raise BadRequest(f"candidate_lengths must be a list of at most {KEY_LENGTH_CEILING} integers.")
    for n in lengths:
        if isinstance(n, bool) or not isinstance(n, int) or not 1 <= n <= KEY_LENGTH_CEILING:
            raise BadRequest(f"candidate_lengths entries must be integers from 1 to {KEY_LENGTH_CEILING}.")
    return lengths


def _check_rate(key):
    ok, ip = rate_limit(key, limit=app.config["RATE_LIMIT_PER_MIN"], window_s=60)
    if not ok:
        app.logger.warning("[RATE] %s exceeded for %s", key, ip)
    return ok


# ------------------- Health -------------------
@app.route("/api/health", methods=["GET"])
def health():
    segmenter = get_segmenter(app.config["DICTIONARY_PATH"])
    return jsonify({"ok": True, "segmentation": bool(segmenter.enabled)})


# ------------------- Kasiski examination -------------------
@app.route("/api/vigenere/patterns", methods=["POST"])
def vigenere_patterns():
    if not _check_rate("vigenere_patterns"):
        return jsonify({"ok": False, "error": "Rate limit exceeded. Try again shortly."}), 429
    data = _payload()
    solver = _solver(data)

    min_len = _int_field(data, "min_len", app.config["MIN_PATTERN_LEN"])
    max_len = _int_field(data, "max_len", app.config["MAX_PATTERN_LEN"])
    max_key_len = _int_field(data, "max_key_len", app.config["MAX_KEY_LENGTH"], lo=2)
    top_n = _int_field(data, "top_n", app.config["CANDIDATE_COUNT"])
    if min_len > max_len:
        raise BadRequest("min_len must not exceed max_len.")

    repeats = solver.find_repeated_patterns(min_len=min_len, max_len=max_len)
    candidates = solver.estimate_key_lengths(repeats, max_key_len=max_key_len, top_n=top_n)

    return jsonify({
        "ok": True,
        "alphabet": str(solver.alphabet),
        "repeat_count": len(repeats),
        "repeats": [
            {"pattern": ng, "positions": pos}
            for ng, pos in list(repeats.items())[:MAX_REPEATS_SHOWN]
        ],
        "candidates": candidates,
    })


# ------------------- Full attack -------------------
@app.route("/api/vigenere/attack", methods=["POST"])
def vigenere_attack():
    if not _check_rate("vigenere_attack"):
        return jsonify({"ok": False, "error": "Rate limit exceeded. Try again shortly."}), 429
    data = _payload()
    solver = _solver(data, segment=_bool_field(data, "segment", True))
    top = _int_field(data, "top", app.config["TOP_RESULTS"])

    lengths = _candidate_lengths(data)
    if lengths is None:
        repeats = solver.find_repeated_patterns(
            min_len=app.config["MIN_PATTERN_LEN"], max_len=app.config["MAX_PATTERN_LEN"]
        )
        lengths = solver.estimate_key_lengths(
            repeats, max_key_len=app.config["MAX_KEY_LENGTH"], top_n=app.config["CANDIDATE_COUNT"]
        )
        if not lengths:
            lengths = fallback_key_lengths(app.config["FALLBACK_MAX"])

    timeout = app.config["ATTACK_TIMEOUT"]
    cancel = CancellationSignal(timeout=timeout if timeout and timeout > 0 else None)
    try:
        results = solver.attack_using_kasiski(lengths, top_results=top, cancel=cancel)
    except AttackCancelled as e:
        app.logger.warning("[VIGENERE] attack timed out after lengths %s", e.completed_lengths)
        return jsonify({
            "ok": False,
            "cancelled": True,
            "error": "Attack ran out of time; partial results only.",
            "completed_lengths": e.completed_lengths,
            "results": [r.to_dict() for r in e.results],
        }), 503
    except Exception as e:
        app.logger.exception("[VIGENERE] attack failed: %s", e)
        return jsonify({"ok": False, "error": "Error breaking cipher."}), 500

    return jsonify({
        "ok": True,
        "alphabet": str(solver.alphabet),
        "candidate_lengths": lengths,
        "results": [r.to_dict() for r in results],
    })


# ------------------- Keyed encode / decode -------------------
def _key_field(data):
    key = data.get("key")
    if not isinstance(key, str) or not key.strip():
        raise BadRequest("key is required.")
    return key.strip()


@app.route("/api/vigenere/decrypt", methods=["POST"])
def vigenere_decrypt():
    if not _check_rate("vigenere_cipher"):
        return jsonify({"ok": False, "error": "Rate limit exceeded. Try again shortly."}), 429
    data = _payload()
    solver = _solver(data)
    return jsonify({"ok": True, "result": solver.decrypt_with_key(_key_field(data))})


@app.route("/api/vigenere/encrypt", methods=["POST"])
def vigenere_encrypt():
    if not _check_rate("vigenere_cipher"):
        return jsonify({"ok": False, "error": "Rate limit exceeded. Try again shortly."}), 429
    data = _payload()
    solver = _solver(data, field="plaintext")
    return jsonify({"ok": True, "result": encrypt(solver.ciphertext, _key_field(data), solver.alphabet)})


if __name__ == "__main__":
    app.run(debug=True)
