"""Tests for the base first order Markov model."""

import numpy as np
import pytest

from cmarkov.markov import END, START, MarkovModel


class TestLearning:

    def test_transitions_are_padded(self, base_model):
        transitions = base_model.get_transitions()
        assert transitions[START]["the"] == 6
        assert transitions[START]["a"] == 3
        assert transitions["sat"][END] == 2
        assert END not in transitions

    def test_word_counts(self, base_model):
        counts = base_model.get_word_counts()
        assert counts["cat"] == 4
        assert START not in counts

    def test_get_probability(self, base_model):
        assert base_model.get_probability(START, "the") == pytest.approx(6 / 9)
        assert base_model.get_probability("cat", "flew") == 0.0
        assert base_model.get_probability("unknown", "cat") == 0.0

    def test_reserved_words_are_rejected(self):
        with pytest.raises(ValueError):
            MarkovModel([["the", END]])


class TestMatrices:

    def test_first_order_matrix_is_stochastic(self, base_model):
        matrix = base_model.get_first_order_matrix()
        assert matrix.shape == (base_model.voc_size(), base_model.voc_size())
        np.testing.assert_allclose(matrix.sum(axis=1), 1.0)

    def test_priors(self, base_model):
        priors = base_model.get_priors()
        assert len(priors) == len(base_model.get_all_words_except_paddings())
        assert priors.sum() == pytest.approx(1.0)

    def test_sample_sequence_follows_transitions(self, base_model):
        rng = np.random.default_rng(3)
        seq = base_model.sample_sequence(rng, max_length=20)
        assert 0 < len(seq) <= 20
        transitions = base_model.get_transitions()
        assert seq[0] in transitions[START]
        for word, next_word in zip(seq[:-1], seq[1:]):
            assert next_word in transitions[word]
