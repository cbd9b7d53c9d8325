"""Tests for the pool-size and pattern-adjusted entropy calculations."""

import math

import pytest


class TestCharsetSize:

    @pytest.mark.parametrize(
        "password, expected",
        [
            ("abc", 26),
            ("ABC", 26),
            ("aB", 52),
            ("a1", 36),
            ("a!", 59),
            ("aA1!", 95),
            ("ñ", 33),
        ],
    )
    def test_pool_is_sum_of_present_classes(self, entropy, password, expected):
        assert entropy.charset_size(password) == expected

    def test_empty_password_uses_minimum_pool(self, entropy):
        assert entropy.charset_size("") == 10


class TestTheoretical:

    def test_length_times_log2_pool(self, entropy):
        assert entropy.theoretical("abc") == pytest.approx(3 * math.log2(26))

    def test_empty_is_zero(self, entropy):
        assert entropy.theoretical("") == 0.0


class TestCalculate:

    def test_plain_short_word_is_not_discounted(self, entropy):
        assert entropy.calculate("xkq") == pytest.approx(3 * math.log2(26))

    def test_identical_run_discounted_by_repetition(self, entropy):
        # all four characters repeated -> factor 0.75
        expected = 4 * math.log2(26) * 0.75
        assert entropy.calculate("aaaa") == pytest.approx(expected)

    def test_keyboard_run_and_letters_then_digits(self, entropy):
        # longest run "abcd"/"1234" covers half -> 1 - (0.2 + 0.05), then 0.9
        expected = 8 * math.log2(36) * 0.75 * 0.9
        assert entropy.calculate("abcd1234") == pytest.approx(expected)

    def test_repeated_character_count_counts_runs_of_two(self, entropy):
        assert entropy.repeated_character_count("aabcdd") == 4
        assert entropy.repeated_character_count("abc") == 0

    def test_longest_run_ratio(self, entropy):
        assert entropy.longest_run_ratio("qwerty") == pytest.approx(1.0)
        assert entropy.longest_run_ratio("xkq") == 0.0

    def test_empty_is_zero(self, entropy):
        assert entropy.calculate("") == 0.0

    @pytest.mark.parametrize(
        "password",
        ["a", "aaaaaaaaaaaa", "qwertyuiop", "1234567890", "Tr0ub4dor&3", "日本語パスワード"],
    )
    def test_never_negative_and_never_above_theoretical(self, entropy, password):
        adjusted = entropy.calculate(password)
        assert 0.0 <= adjusted <= entropy.theoretical(password)
