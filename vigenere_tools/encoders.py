# vigenere_tools/encoders.py
from vigenere_tools.alphabet import STANDARD_ALPHABET, as_alphabet


# ==============================
#  INDEX ARITHMETIC
# ==============================
def decrypt_index(cipher_index: int, key_index: int, size: int) -> int:
    # Python's % already returns a value in [0, size)
    return (cipher_index - key_index) % size


def encrypt_index(plain_index: int, key_index: int, size: int) -> int:
    return (plain_index + key_index) % size


# ==============================
#  VIGENERE
# ==============================
def _vigenere(text, key, alphabet, step):
    alphabet = as_alphabet(alphabet)
    if not key or not len(alphabet):
        return text

    shifts = [alphabet.index(k) or 0 for k in key]
    size = len(alphabet)
    result = []
    ki = 0
    for ch in text:
        ci = alphabet.index(ch)
        if ci is None:
            result.append(ch)
            continue
        new = alphabet[step(ci, shifts[ki % len(shifts)], size)]
        result.append(new.lower() if ch.islower() else new)
        ki += 1
    return "".join(result)


def decrypt(ciphertext: str, key: str, alphabet=STANDARD_ALPHABET) -> str:
    """
    Vigenère decryption over an arbitrary (keyed) alphabet.
    Symbols outside the alphabet are copied through and do not use up a key
    position; lowercase input stays lowercase.
    """
    return _vigenere(ciphertext, key, alphabet, decrypt_index)


def encrypt(plaintext: str, key: str, alphabet=STANDARD_ALPHABET) -> str:
    return _vigenere(plaintext, key, alphabet, encrypt_index)


# ==============================
#  CAESAR (single subchannel)
# ==============================
def caesar_shift(sequence: str, shift: int, alphabet=STANDARD_ALPHABET) -> str:
    """Decrypt an alphabet-only run with one fixed shift."""
    alphabet = as_alphabet(alphabet)
    size = len(alphabet)
    out = []
    for ch in sequence:
        ci = alphabet.index(ch)
        out.append(ch if ci is None else alphabet[decrypt_index(ci, shift, size)])
    return "".join(out)
