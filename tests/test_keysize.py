"""Tests for keysize estimation"""
import pytest

from xorbreak.analysis.keysize import KeysizeEstimator
from xorbreak.error_handling import InvalidArgumentError
from xorbreak.utils.xor_tools import XORTools


class TestScoreKeysize:

    def test_single_pair(self):
        data = b"\x00" * 4 + b"\xff" * 4
        candidate = KeysizeEstimator(sample_pairs=1).score_keysize(data, 4)
        assert candidate.keysize == 4
        assert candidate.pairs == 1
        assert candidate.distance == pytest.approx(8.0)

    def test_pairs_capped_by_sample_pairs(self):
        data = bytes(200)
        assert KeysizeEstimator(sample_pairs=3).score_keysize(data, 5).pairs == 3

    def test_partial_pairs_normalized_by_sample_pairs(self):
        # Three of eight pairs of 4-byte blocks fit in 26 bytes: 12 bits / (4 * 8)
        data = (b"\x00" * 4 + b"\x01" * 4) * 3 + b"\x00\x00"
        candidate = KeysizeEstimator(sample_pairs=8).score_keysize(data, 4)
        assert candidate.pairs == 3
        assert candidate.distance == pytest.approx(0.375)

    def test_missing_pairs_lower_the_distance(self):
        data = b"\x00" * 4 + b"\xff" * 4
        assert KeysizeEstimator(sample_pairs=8).score_keysize(data, 4).distance == pytest.approx(1.0)

    def test_no_usable_pair(self):
        candidate = KeysizeEstimator().score_keysize(b"abc", 2)
        assert candidate.pairs == 0


class TestEstimate:

    def test_max_keysize_clamped_to_half_input(self):
        ranked = KeysizeEstimator(min_keysize=2, max_keysize=40).rank(bytes(range(10)))
        assert sorted(c.keysize for c in ranked) == [2, 3, 4, 5]

    def test_no_keysize_fits(self):
        assert KeysizeEstimator(min_keysize=6).estimate(bytes(10), top_n=3) == []

    def test_ties_keep_keysize_order(self):
        ranked = KeysizeEstimator().estimate(bytes(64), top_n=3)
        assert [c.keysize for c in ranked] == [2, 3, 4]
        assert all(c.distance == 0.0 for c in ranked)

    def test_returns_at_most_top_n(self):
        assert len(KeysizeEstimator().estimate(bytes(range(256)), top_n=5)) == 5

    def test_sorted_ascending(self, english_text):
        ranked = KeysizeEstimator().rank(english_text)
        distances = [c.distance for c in ranked]
        assert distances == sorted(distances)

    @pytest.mark.parametrize("keylen", [3, 5, 7, 13, 17, 20])
    def test_true_keysize_ranked_near_top(self, english_text, random_key, keylen):
        ciphertext = XORTools.repeating_key_xor(english_text, random_key(keylen))
        top = KeysizeEstimator().estimate(ciphertext, top_n=5)
        assert any(c.keysize % keylen == 0 for c in top)

    @pytest.mark.parametrize("kwargs", [
        {"min_keysize": 0},
        {"sample_pairs": 0},
    ])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(InvalidArgumentError):
            KeysizeEstimator(**kwargs)

    def test_invalid_top_n(self):
        with pytest.raises(InvalidArgumentError):
            KeysizeEstimator().estimate(bytes(64), top_n=0)
