"""
VerseTrail - Guided micro-lessons for short verses.

Each verse is taught through six steps (explanation, recitation, recording,
word-order quiz, comprehension quiz, celebration). Progress and stars are
persisted per learner and drive verse/chapter unlocking.
"""

__version__ = "0.1.0"
