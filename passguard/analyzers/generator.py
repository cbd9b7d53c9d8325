"""
Password Generator
===================

Generates random passwords from a :class:`GeneratorConfig`, either by
uniform draws from a character set assembled from the include flags, or
as a pronounceable run of consonant/vowel syllables.

Randomness comes from :class:`secrets.SystemRandom` (the operating
system CSPRNG) unless a ``random.Random`` instance is injected, which the
test-suite does to make output reproducible.

Pronounceable layout::

    <syllables truncated to body length><digit?><symbol?>

One slot each is reserved for a digit and a symbol when those classes are
enabled, so the result is always exactly ``config.length`` characters.

References:
    - NIST SP 800-90A Rev. 1 (2015). Recommendation for Random Number
      Generation Using Deterministic Random Bit Generators.
    - FIPS 181 (1993). Automated Password Generator (pronounceable
      password generation).
"""

from __future__ import annotations

import math
import random
import secrets
import string
from typing import Optional

from passguard.core.models import GeneratorConfig


SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
SIMILAR_CHARACTERS = frozenset("il1Lo0O")

CONSONANTS = "bcdfghjklmnpqrstvwxz"
VOWELS = "aeiou"
PRONOUNCEABLE_SYMBOLS = "!@#$%"


class PasswordGenerator:
    """Builds passwords from generator configurations.

    Args:
        rng: Random source. Defaults to a fresh
            :class:`secrets.SystemRandom`.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng: random.Random = rng or secrets.SystemRandom()

    @staticmethod
    def build_charset(config: GeneratorConfig) -> str:
        """Character set implied by the include/exclude flags.

        Returns:
            The charset, possibly empty when every include flag is off.
        """
        pools = (
            (config.include_lowercase, string.ascii_lowercase),
            (config.include_uppercase, string.ascii_uppercase),
            (config.include_numbers, string.digits),
            (config.include_symbols, SYMBOLS),
        )
        charset = "".join(chars for enabled, chars in pools if enabled)
        if config.exclude_similar:
            charset = "".join(c for c in charset if c not in SIMILAR_CHARACTERS)
        return charset

    def generate(self, config: GeneratorConfig) -> str:
        """Generate one password.

        Args:
            config: Validated generator configuration.

        Returns:
            A password of exactly ``config.length`` characters, or ``""``
            when the charset is empty and pronounceable mode is off.
        """
        if config.pronounceable:
            return self._pronounceable(config)

        charset = self.build_charset(config)
        if not charset:
            return ""
        return "".join(self._rng.choice(charset) for _ in range(config.length))

    def _pronounceable(self, config: GeneratorConfig) -> str:
        extras = ""
        if config.include_numbers:
            extras += self._rng.choice(string.digits)
        if config.include_symbols:
            extras += self._rng.choice(PRONOUNCEABLE_SYMBOLS)

        body_length = config.length - len(extras)
        syllables = [
            self._rng.choice(CONSONANTS) + self._rng.choice(VOWELS)
            for _ in range(math.ceil(body_length / 2))
        ]
        return "".join(syllables)[:body_length] + extras
