"""
console.py — Interactive Vigenère solver
----------------------------------------
Kasiski examination + frequency analysis + word segmentation over a keyed
alphabet, driven from the terminal. Ctrl+C during the attack stops it after
the current key length and prints what was found so far.
"""

import logging
import signal

import helpers
from vigenere_tools.alphabet import build_keyed_alphabet
from vigenere_tools.vigenere import (
    AttackCancelled,
    CancellationSignal,
    VigenereSolver,
    fallback_key_lengths,
)

REPEATS_SHOWN = 10


def ask(prompt, default=""):
    answer = input(prompt).strip()
    return answer or default


def ask_int(prompt, default):
    try:
        value = int(input(prompt).strip())
    except ValueError:
        return default
    return value if value >= 1 else default


def print_results(results, top_n):
    print(f"\nTop {top_n} results:")
    for idx, r in enumerate(results[:top_n], 1):
        print(f"\n[{idx}] Key='{r.key}' Score={r.score:.2f}")
        print("--------- Segmented (readable) ---------")
        print(r.readable)
        print("--------------- Raw --------------------")
        print(r.plaintext)


def run():
    print("Vigenère Solver with Kasiski + Word Segmentation (Keyed alphabet)\n")

    ciphertext = input("Ciphertext (paste): ")
    base = ask("Base alphabet (default A-Z) press Enter to use default: ", helpers.DEFAULT_ALPHABET).upper()
    keyphrase = ask("Keyed-alphabet keyphrase (optional): ")

    alphabet = build_keyed_alphabet(base, keyphrase)
    print(f"\nUsing alphabet: {alphabet}\n")

    dict_path = ask(
        f"Path to word-frequency dictionary (Enter to try {helpers.DICTIONARY_PATH}): ",
        helpers.DICTIONARY_PATH,
    )
    segmenter = helpers.get_segmenter(dict_path)
    print("[WordSegmentation] " + ("enabled." if segmenter.enabled else "disabled."))

    solver = VigenereSolver(ciphertext, alphabet, segmenter)

    repeats = solver.find_repeated_patterns(
        min_len=helpers.MIN_PATTERN_LEN, max_len=helpers.MAX_PATTERN_LEN
    )
    if repeats:
        print("Found repeated substrings (sample):")
        for ng, pos in list(repeats.items())[:REPEATS_SHOWN]:
            print(f"'{ng}' at positions: {','.join(str(p) for p in pos)}")
    else:
        print("No repeated substrings found with current settings.")

    candidates = solver.estimate_key_lengths(
        repeats, max_key_len=helpers.MAX_KEY_LENGTH, top_n=helpers.CANDIDATE_COUNT
    )
    print("\nCandidate key lengths (ranked): " + (", ".join(map(str, candidates)) if candidates else "(none)"))

    if ask("Try these candidate lengths? (y/N): ").lower() != "y" or not candidates:
        max_len = ask_int("Enter max key length to analyze (e.g., 6): ", helpers.FALLBACK_MAX)
        candidates = fallback_key_lengths(max_len)

    top_n = ask_int(f"How many top results to show (default {helpers.TOP_RESULTS}): ", helpers.TOP_RESULTS)

    cancel = CancellationSignal()
    previous = signal.signal(signal.SIGINT, lambda signum, frame: cancel.cancel())
    try:
        results = solver.attack_using_kasiski(candidates, top_results=top_n, cancel=cancel)
    except AttackCancelled as e:
        print(f"\nCancelled. Completed key lengths: {e.completed_lengths or '(none)'}")
        results = e.results
    finally:
        signal.signal(signal.SIGINT, previous)

    print_results(results, top_n)
    print("\nDone.")
    return results


def main():
    logging.basicConfig(
        level=getattr(logging, helpers.LOG_LEVEL, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        run()
    except (KeyboardInterrupt, EOFError):
        print("\nAborted.")


if __name__ == "__main__":
    main()
