"""Enumeration of the words of the Recursian language."""

from __future__ import annotations

VOWELS = ("e", "i", "u")
CONSONANTS = ("b", "k", "n", "r", "s", "'")


def all_recursian_words(num_syllables: int) -> list[str]:
    """Return every Recursian word with exactly ``num_syllables`` syllables.

    A syllable is a consonant followed by a vowel; a word may also open with
    a lone vowel syllable.
    """
    if num_syllables < 0:
        raise ValueError("numSyllables must be positive")

    words = [""]
    for _ in range(num_syllables):
        longer: list[str] = []
        for word in words:
            if word == "":
                longer.extend(VOWELS)
            longer.extend(
                consonant + vowel + word for consonant in CONSONANTS for vowel in VOWELS
            )
        words = longer
    return words