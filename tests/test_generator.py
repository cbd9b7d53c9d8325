"""Tests for random and pronounceable password generation."""

import random
import secrets
import string

import pytest
from pydantic import ValidationError

from passguard.analyzers.generator import (
    CONSONANTS,
    PRONOUNCEABLE_SYMBOLS,
    SIMILAR_CHARACTERS,
    SYMBOLS,
    VOWELS,
    PasswordGenerator,
)
from passguard.core.models import GeneratorConfig


@pytest.fixture
def generator(rng):
    return PasswordGenerator(rng)


class TestConfig:

    @pytest.mark.parametrize("length", [3, 129])
    def test_length_out_of_range(self, length):
        with pytest.raises(ValidationError):
            GeneratorConfig(length=length)

    def test_camel_case_aliases(self):
        config = GeneratorConfig(includeSymbols=False, exclude_similar=True)
        dumped = config.model_dump(by_alias=True)
        assert dumped["includeSymbols"] is False
        assert dumped["excludeSimilar"] is True
        assert dumped["length"] == 16


class TestCharset:

    def test_all_classes(self):
        charset = PasswordGenerator.build_charset(GeneratorConfig())
        assert len(charset) == 26 + 26 + 10 + len(SYMBOLS)

    def test_symbols_only(self):
        config = GeneratorConfig(
            include_uppercase=False, include_lowercase=False, include_numbers=False,
        )
        assert PasswordGenerator.build_charset(config) == SYMBOLS

    def test_exclude_similar(self):
        charset = PasswordGenerator.build_charset(GeneratorConfig(exclude_similar=True))
        assert not set(charset) & SIMILAR_CHARACTERS


class TestRandomGeneration:

    @pytest.mark.parametrize("length", [4, 16, 20, 128])
    def test_exact_length_within_charset(self, generator, length):
        config = GeneratorConfig(length=length)
        password = generator.generate(config)
        assert len(password) == length
        assert set(password) <= set(PasswordGenerator.build_charset(config))

    def test_empty_charset_returns_empty_string(self, generator):
        config = GeneratorConfig(
            include_uppercase=False, include_lowercase=False,
            include_numbers=False, include_symbols=False,
        )
        assert generator.generate(config) == ""

    def test_digits_only(self, generator):
        config = GeneratorConfig(
            length=32, include_uppercase=False, include_lowercase=False, include_symbols=False,
        )
        assert set(generator.generate(config)) <= set(string.digits)

    def test_exclude_similar_never_emits_similar(self, generator):
        password = generator.generate(GeneratorConfig(length=128, exclude_similar=True))
        assert not set(password) & SIMILAR_CHARACTERS

    def test_seeded_output_is_reproducible(self):
        config = GeneratorConfig(length=24)
        first = PasswordGenerator(random.Random(99)).generate(config)
        second = PasswordGenerator(random.Random(99)).generate(config)
        assert first == second

    def test_sixteen_chars_usually_cover_all_classes(self, generator):
        config = GeneratorConfig(length=16)
        covered = 0
        for _ in range(50):
            password = generator.generate(config)
            if (
                any(c.isupper() for c in password)
                and any(c.islower() for c in password)
                and any(c.isdigit() for c in password)
                and any(c in SYMBOLS for c in password)
            ):
                covered += 1
        assert covered >= 30

    def test_defaults_to_system_random(self):
        assert isinstance(PasswordGenerator()._rng, secrets.SystemRandom)


class TestPronounceable:

    @pytest.mark.parametrize("length", [4, 5, 9, 16, 33])
    @pytest.mark.parametrize("numbers, symbols", [(True, True), (True, False), (False, False)])
    def test_exact_length(self, generator, length, numbers, symbols):
        config = GeneratorConfig(
            length=length, pronounceable=True,
            include_numbers=numbers, include_symbols=symbols,
        )
        assert len(generator.generate(config)) == length

    def test_layout(self, generator):
        password = generator.generate(GeneratorConfig(length=12, pronounceable=True))
        body, digit, symbol = password[:-2], password[-2], password[-1]
        assert digit in string.digits
        assert symbol in PRONOUNCEABLE_SYMBOLS
        for index, char in enumerate(body):
            assert char in (CONSONANTS if index % 2 == 0 else VOWELS)

    def test_letters_only_when_everything_disabled(self, generator):
        config = GeneratorConfig(
            length=10, pronounceable=True,
            include_uppercase=False, include_lowercase=False,
            include_numbers=False, include_symbols=False,
        )
        password = generator.generate(config)
        assert len(password) == 10
        assert password.isalpha()
