"""Tests for the layered store and the frequency builder."""

import pytest

from cmarkov.markov import END, START
from cmarkov.transitions import FrequencyBuilder, LayeredTransitions, get_word_frequencies


class TestLayeredTransitions:

    def test_increment_and_sizes(self):
        store = LayeredTransitions(2)
        store.increment(0, START, "a")
        store.increment(0, START, "a")
        store.increment(1, "a", "b", 0.5)
        store.increment(1, "a", "c")
        assert store.matrices[0][START]["a"] == 2.0
        assert store.sizes() == [1, 1]
        assert store.edge_counts() == [1, 2]
        assert store.words_at(1) == ["b", "c"]
        assert len(store) == 2

    def test_record_removed_has_no_duplicates(self):
        store = LayeredTransitions(1)
        store.record_removed(store.removed_by_constraint, 0, "a")
        store.record_removed(store.removed_by_constraint, 0, "a")
        assert store.removed_by_constraint == [["a"]]

    def test_word_frequencies(self):
        frequencies = get_word_frequencies([["a", "b"], ["a", "c"]])
        assert frequencies["a"] == 2
        assert frequencies["c"] == 1


class TestSequencesSource:

    def test_positional_counts(self, base_model):
        store, training = FrequencyBuilder().build(base_model, 3)
        assert training == [["the", "cat", "sat"], ["the", "dog", "sat"], ["a", "dog", "ran"]]
        assert store.matrices[0] == {START: {"the": 2.0, "a": 1.0}}
        assert store.matrices[1] == {"the": {"cat": 1.0, "dog": 1.0}, "a": {"dog": 1.0}}
        assert store.matrices[2] == {"cat": {"sat": 1.0}, "dog": {"sat": 1.0, "ran": 1.0}}
        assert store.word_frequencies["dog"] == 2
        assert store.row_totals[2]["dog"] == 2.0

    def test_probability_weighting(self, base_model):
        builder = FrequencyBuilder(weighting="probability")
        store, _ = builder.build(base_model, 3)
        assert store.matrices[1]["the"]["cat"] == pytest.approx(0.2)
        assert store.matrices[0][START]["the"] == pytest.approx(2 * 6 / 9)

    def test_auto_source(self, base_model):
        builder = FrequencyBuilder()
        assert builder.resolve_layer_source(base_model, 3) == "sequences"
        assert builder.resolve_layer_source(base_model, 4) == "transitions"

    def test_length_must_be_positive(self, base_model):
        with pytest.raises(ValueError):
            FrequencyBuilder().build(base_model, 0)


class TestTransitionsSource:

    def test_every_layer_copies_the_base_model(self, base_model):
        store, training = FrequencyBuilder(layer_source="transitions").build(base_model, 3)
        assert training == []
        assert store.matrices[0] == {START: {"the": 6.0, "a": 3.0}}
        assert store.matrices[1]["the"]["dog"] == 3.0
        for matrix in store.matrices:
            for row in matrix.values():
                assert START not in row
                assert END not in row

    def test_last_word_must_end_a_sentence(self, base_model):
        store, _ = FrequencyBuilder(layer_source="transitions").build(base_model, 2)
        assert "cat" in store.matrices[1]["the"]
        assert "dog" not in store.matrices[1]["the"]

    def test_end_probabilities(self):
        base = {START: {"a": 1}, "a": {"b": 1}, "b": {END: 1, "a": 3}}
        store, _ = FrequencyBuilder(layer_source="transitions").build(base, 2)
        assert store.end_probabilities == {"b": 0.25}
        store, _ = FrequencyBuilder(layer_source="transitions", end_on_sentence_end=False).build(base, 2)
        assert store.end_probabilities == {}

    def test_end_filter_can_be_disabled(self, base_model):
        builder = FrequencyBuilder(layer_source="transitions", end_on_sentence_end=False)
        store, _ = builder.build(base_model, 2)
        assert "dog" in store.matrices[1]["the"]

    def test_row_totals_are_unconstrained(self, base_model):
        store, _ = FrequencyBuilder(layer_source="transitions").build(base_model, 2)
        # 'the' is followed by 10 words in the corpus, some of them cannot end
        assert store.row_totals[1]["the"] == 10.0
        assert sum(store.matrices[1]["the"].values()) < 10.0

    def test_bare_mapping(self):
        base = {"a": {"b": 2}, "b": {"a": 1}}
        store, _ = FrequencyBuilder().build(base, 2)
        assert set(store.matrices[0][START]) == {"a", "b"}
        assert store.matrices[1] == {"a": {"b": 2.0}, "b": {"a": 1.0}}
