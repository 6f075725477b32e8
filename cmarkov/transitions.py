"""
Copyright (c) 2025 Ynosound.
All rights reserved.
"""
from collections import Counter

from cmarkov.markov import START, END

SENTINELS = (START, END)


class LayeredTransitions:
    """One transition matrix per position of the sentence.
    matrix[0] goes from START to the first word, matrix[i] from the word at
    position i - 1 to the word at position i. Rows are dicts and keep their
    insertion order, which is the order used when sampling."""

    def __init__(self, sentence_length):
        self.sentence_length = sentence_length
        self.matrices = [{} for _ in range(sentence_length)]
        # row sums before any constraint was applied
        self.row_totals = [{} for _ in range(sentence_length)]
        self.removed_by_constraint = [[] for _ in range(sentence_length)]
        self.removed_by_arc_consistency = [[] for _ in range(sentence_length)]
        # probability that a word of the last position ends the sentence, 1.0 when absent
        self.end_probabilities = {}
        self.word_frequencies = Counter()

    def __len__(self):
        return self.sentence_length

    def __repr__(self):
        return f"LayeredTransitions(length={self.sentence_length}, sizes={self.sizes()})"

    def increment(self, layer, word, next_word, amount=1.0):
        matrix = self.matrices[layer]
        if word not in matrix:
            matrix[word] = {}
        matrix[word][next_word] = matrix[word].get(next_word, 0.0) + amount

    def row(self, layer, word):
        return self.matrices[layer].get(word)

    def sizes(self):
        return [len(matrix) for matrix in self.matrices]

    def edge_counts(self):
        return [sum(len(row) for row in matrix.values()) for matrix in self.matrices]

    def words_at(self, position):
        # the distinct targets of matrix[position], in first-seen order
        words = {}
        for row in self.matrices[position].values():
            for word in row:
                words[word] = True
        return list(words)

    def snapshot_row_totals(self):
        for layer, matrix in enumerate(self.matrices):
            self.row_totals[layer] = {word: sum(row.values()) for word, row in matrix.items()}

    def record_removed(self, removed, position, word):
        if word not in removed[position]:
            removed[position].append(word)


def get_base_transitions(base_model):
    if hasattr(base_model, "get_transitions"):
        return base_model.get_transitions()
    return base_model


def get_base_sequences(base_model):
    return list(getattr(base_model, "input_sequences", []))


class FrequencyBuilder:
    """Turns the base model (and its sequences) into raw per-layer counts."""

    def __init__(self, layer_source="auto", weighting="count", end_on_sentence_end=True):
        self.layer_source = layer_source
        self.weighting = weighting
        self.end_on_sentence_end = end_on_sentence_end

    def resolve_layer_source(self, base_model, sentence_length):
        if self.layer_source != "auto":
            return self.layer_source
        if any(len(seq) == sentence_length for seq in get_base_sequences(base_model)):
            return "sequences"
        return "transitions"

    def build(self, base_model, sentence_length):
        """Returns the raw layered counts and the training sequences used to get them."""
        if sentence_length < 1:
            raise ValueError(f"sentence length must be at least 1, got {sentence_length}")
        store = LayeredTransitions(sentence_length)
        if self.resolve_layer_source(base_model, sentence_length) == "sequences":
            training_sequences = [list(seq) for seq in get_base_sequences(base_model)
                                  if len(seq) == sentence_length]
            self.count_sequences(store, base_model, training_sequences)
        else:
            training_sequences = []
            self.copy_transitions(store, base_model)
        return store, training_sequences

    def transition_weight(self, transitions, word, next_word):
        row = transitions.get(word)
        if not row or next_word not in row:
            return 0.0
        if self.weighting == "count":
            return float(row[next_word])
        return row[next_word] / sum(row.values())

    def count_sequences(self, store, base_model, sequences):
        transitions = get_base_transitions(base_model)
        for seq in sequences:
            padded = [START] + list(seq)
            for i in range(len(seq)):
                if self.weighting == "count":
                    amount = 1.0
                else:
                    # absent from the base model means zero, so no edge at all
                    amount = self.transition_weight(transitions, padded[i], padded[i + 1])
                    if amount == 0:
                        continue
                store.increment(i, padded[i], padded[i + 1], amount)
        store.word_frequencies = get_word_frequencies(sequences)
        store.snapshot_row_totals()

    def copy_transitions(self, store, base_model):
        transitions = get_base_transitions(base_model)
        store.word_frequencies = self.base_word_frequencies(base_model, transitions)
        last = store.sentence_length - 1
        enders = None
        if self.end_on_sentence_end and any(END in row for row in transitions.values()):
            enders = {word for word, row in transitions.items() if END in row}
            store.end_probabilities = {word: transitions[word][END] / sum(transitions[word].values())
                                       for word in enders}
        for word in self.first_words(transitions):
            if last == 0 and enders is not None and word not in enders:
                continue
            if START in transitions:
                weight = self.transition_weight(transitions, START, word)
            else:
                weight = float(store.word_frequencies[word]) or 1.0
            store.increment(0, START, word, weight)
        for layer in range(1, store.sentence_length):
            for word, row in transitions.items():
                if word in SENTINELS:
                    continue
                for next_word in row:
                    if next_word in SENTINELS:
                        continue
                    if layer == last and enders is not None and next_word not in enders:
                        continue
                    store.increment(layer, word, next_word, self.transition_weight(transitions, word, next_word))
        store.snapshot_row_totals()
        # the totals must describe the unconstrained rows, END included
        for layer in range(1, store.sentence_length):
            for word in store.row_totals[layer]:
                if self.weighting == "count":
                    store.row_totals[layer][word] = float(sum(transitions[word].values()))
                else:
                    store.row_totals[layer][word] = 1.0

    @staticmethod
    def first_words(transitions):
        if START in transitions:
            return [w for w in transitions[START] if w not in SENTINELS]
        # a bare mapping does not say how sentences open: any known word can
        words = {}
        for word, row in transitions.items():
            for w in [word] + list(row):
                if w not in SENTINELS:
                    words[w] = True
        return list(words)

    @staticmethod
    def base_word_frequencies(base_model, transitions):
        if hasattr(base_model, "get_word_counts"):
            return Counter(base_model.get_word_counts())
        frequencies = Counter()
        for row in transitions.values():
            for word, weight in row.items():
                if word not in SENTINELS:
                    frequencies[word] += weight
        return frequencies


def get_word_frequencies(sentences):
    """Word -> number of occurrences in the sentences, usable as priors."""
    frequencies = Counter()
    for sentence in sentences:
        frequencies.update(sentence)
    return frequencies
