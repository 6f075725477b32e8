"""
Copyright (c) 2025 Ynosound.
All rights reserved.
"""
import numpy as np

from cmarkov.arc_consistency import ArcConsistencyPruner
from cmarkov.constraints import WILDCARD, make_constraint_policy
from cmarkov.errors import ModelDefectError, NotTrainedError
from cmarkov.markov import START, END
from cmarkov.normalizer import normalize
from cmarkov.options import Options
from cmarkov.plotting import plot_layer_sizes
from cmarkov.transitions import FrequencyBuilder

"""
- Fixed length Markov chain on words, one transition matrix per position (non-homogeneous Markov model).
- Constraints only delete edges. Arc-consistency then removes the nodes that cannot reach the end,
  so sampling never gets stuck and never has to backtrack.
- Training is a one-shot pipeline: counts -> constraint -> pruning -> START row -> normalization.
  The matrices are never modified afterwards and can be shared between readers.
- Randomness comes from a numpy Generator, passed explicitly or owned by the model (Options.seed).
"""


class ConstrainedMarkov:

    def __init__(self, policy="length", options=None, **policy_kwargs):
        self.policy = make_constraint_policy(policy, **policy_kwargs)
        self.options = options if options is not None else Options()
        # lookahead of the model: one word
        self.markov_order = 1
        self.sentence_length = 0
        self.constraint = None
        self.store = None
        self.raw_sizes = []
        self.training_sequences = []
        self.rng = np.random.default_rng(self.options.seed)

    def __repr__(self):
        return f"ConstrainedMarkov(policy={self.policy.name!r}, length={self.sentence_length})"

    def reset_rng(self, seed=None):
        self.rng = np.random.default_rng(self.options.seed if seed is None else seed)

    def is_trained(self):
        return self.store is not None

    def check_trained(self):
        if self.store is None:
            raise NotTrainedError("the model has not been trained")

    def train(self, base_model, constraint):
        """Builds the layered matrices from the base model, applies the
        constraint, removes dead nodes, adds the START row and normalizes.
        Raises NoSolutionError if no sentence satisfies the constraint."""
        if isinstance(constraint, int):
            constraint = [WILDCARD] * constraint
        constraint = list(constraint)
        length = self.policy.sentence_length(constraint)
        builder = FrequencyBuilder(layer_source=self.options.layer_source, weighting=self.options.weighting,
                                   end_on_sentence_end=self.options.end_on_sentence_end)
        store, training_sequences = builder.build(base_model, length)
        raw_sizes = store.sizes()
        self.show_sizes("raw", store)
        self.policy.apply(store, constraint)
        self.show_sizes("constrained", store)
        removed = ArcConsistencyPruner().prune(store)
        self.show_sizes(f"arc-consistent ({removed} nodes removed)", store)
        self.add_start_transition(store)
        normalize(store, self.options.normalization)
        self.store = store
        self.raw_sizes = raw_sizes
        self.sentence_length = length
        self.constraint = constraint
        self.training_sequences = training_sequences
        return self

    @staticmethod
    def add_start_transition(store):
        # START goes to every surviving first word, weighted by its prior
        surviving = store.matrices[0][START]
        weights = {word: float(store.word_frequencies[word]) or surviving[word] for word in surviving}
        store.matrices[0] = {START: weights}
        store.row_totals[0] = {START: sum(weights.values())}

    def show_sizes(self, stage, store):
        if self.options.debug:
            print(f"{stage} matrices sizes: {store.sizes()}")

    def get_next_word(self, prev_word, layer, rng):
        row = self.store.row(layer, prev_word)
        if not row:
            raise ModelDefectError(f"no continuation for {prev_word!r} in layer {layer}")
        draw = rng.random()
        cumulative = 0.0
        for word, probability in row.items():
            cumulative += probability
            if cumulative > draw:
                return word
        # rounding: the row sums to slightly less than the draw
        return word

    def generate_sentence(self, rng=None):
        self.check_trained()
        rng = rng if rng is not None else self.rng
        sentence = []
        word = START
        for layer in range(self.sentence_length):
            word = self.get_next_word(word, layer, rng)
            if word == END:
                break
            sentence.append(word)
        return sentence

    def generate_sentences(self, options=None, rng=None):
        self.check_trained()
        options = options if options is not None else self.options
        rng = rng if rng is not None else self.rng
        return [self.generate_sentence(rng) for _ in range(options.sequence_count)]

    def get_sentence_probability(self, sentence):
        """Product of the transition probabilities along the sentence.
        0.0 for sentences the model cannot produce."""
        self.check_trained()
        words = list(sentence)
        if words and words[0] == START:
            words = words[1:]
        if words and words[-1] == END:
            words = words[:-1]
        if len(words) != self.sentence_length:
            return 0.0
        probability = 1.0
        prev_word = START
        for layer, word in enumerate(words):
            row = self.store.row(layer, prev_word)
            if row is None or word not in row:
                return 0.0
            probability *= row[word]
            prev_word = word
        return probability

    def get_sentence_length(self):
        return self.sentence_length

    def get_markov_order(self):
        return self.markov_order

    def get_transition_matrices(self):
        self.check_trained()
        return self.store.matrices

    def get_transition_matrices_sizes(self):
        self.check_trained()
        return self.store.sizes()

    def get_training_sequences(self):
        return self.training_sequences

    def get_total_solution_count(self):
        """Number of distinct sentences the model can produce.
        The number of completions of a (word, layer) does not depend on the
        path that led to it, so layers are counted from the end."""
        self.check_trained()
        following = None
        for layer in reversed(range(self.sentence_length)):
            counts = {}
            for word, row in self.store.matrices[layer].items():
                if following is None:
                    counts[word] = len(row)
                else:
                    counts[word] = sum(following.get(next_word, 0) for next_word in row)
            following = counts
        return following.get(START, 0)

    def iter_solutions(self, limit=None):
        """Depth first enumeration of all the sentences, in row order."""
        self.check_trained()
        if limit is not None and limit <= 0:
            return
        found = 0
        stack = [(0, START, [])]
        while stack:
            layer, word, prefix = stack.pop()
            if layer == self.sentence_length:
                yield prefix
                found += 1
                if limit is not None and found >= limit:
                    return
                continue
            row = self.store.row(layer, word) or {}
            for next_word in reversed(list(row)):
                stack.append((layer + 1, next_word, prefix + [next_word]))

    def sample_removed_node_by_constraint(self, layer_index, rng=None):
        self.check_trained()
        return self.sample_removed_nodes(self.store.removed_by_constraint, layer_index, rng)

    def sample_removed_node_by_arc_consistency(self, layer_index, rng=None):
        self.check_trained()
        return self.sample_removed_nodes(self.store.removed_by_arc_consistency, layer_index, rng)

    def sample_removed_nodes(self, nodes, layer_index, rng=None):
        if not nodes[layer_index]:
            return None
        rng = rng if rng is not None else self.rng
        return nodes[layer_index][rng.integers(len(nodes[layer_index]))]

    def print_transition_probs(self):
        self.check_trained()
        for layer, matrix in enumerate(self.store.matrices):
            print(f"layer {layer}")
            for word, row in matrix.items():
                for next_word, probability in row.items():
                    print(f"  {word} -> {next_word}: {probability:.4f}")

    def print_debug_info(self, options=None):
        options = options if options is not None else self.options
        self.check_trained()
        print(f"markov order: {self.get_markov_order()}")
        print(f"training sentence count: {len(self.training_sequences)}")
        print(f"transition matrices sizes: {self.get_transition_matrices_sizes()}")
        if options.debug:
            print(f"total solution count: {self.get_total_solution_count()}")

    def plot_layer_sizes(self, output_file=None):
        self.check_trained()
        return plot_layer_sizes(self.raw_sizes, self.get_transition_matrices_sizes(), output_file=output_file)
