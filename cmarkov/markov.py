"""
Copyright (c) 2025 Ynosound.
All rights reserved.
"""
from collections import Counter

import numpy as np

# sentinels, distinct from any vocabulary word
START = "<<START>>"
END = "<<END>>"


class MarkovModel:
    """First order Markov model over words, learned from token sequences.
    Every sequence is padded with START and END, so the transitions also say
    which words can open and close a sentence."""

    def __init__(self, sequences=None):
        self.start_padding = START
        self.end_padding = END
        self.input_sequences = []
        self.all_unique_words = []
        self.word_counts = Counter()
        self.transitions = {}
        if sequences is not None:
            for seq in sequences:
                self.learn_sequence(seq)

    def learn_sequence(self, sequence):
        sequence = list(sequence)
        for word in sequence:
            if word in (START, END):
                raise ValueError(f"{word} is reserved and cannot appear in a training sequence")
        self.input_sequences.append(sequence)
        self.word_counts.update(sequence)
        padded = [START] + sequence + [END]
        for word in padded:
            if word not in self.all_unique_words:
                self.all_unique_words.append(word)
        for word, next_word in zip(padded[:-1], padded[1:]):
            if word not in self.transitions:
                self.transitions[word] = Counter()
            self.transitions[word][next_word] += 1

    def voc_size(self):
        # the number of unique words, including START and END
        return len(self.all_unique_words)

    def get_all_words(self):
        return self.all_unique_words

    def get_all_words_except_paddings(self):
        return [w for w in self.all_unique_words if w not in (START, END)]

    def get_transitions(self):
        return self.transitions

    def get_word_counts(self):
        return self.word_counts

    def get_probability(self, word, next_word):
        row = self.transitions.get(word)
        if not row:
            return 0.0
        return row[next_word] / sum(row.values())

    # returns the priors for all words (except start and end)
    def get_priors(self):
        keys = self.get_all_words_except_paddings()
        counts = np.array([self.word_counts[w] for w in keys], dtype=float)
        if counts.sum() == 0:
            return counts
        return counts / counts.sum()

    def get_first_order_matrix(self):
        # all states, including start and end padding states
        keys = self.get_all_words()
        result = np.zeros((len(keys), len(keys)))
        for i_word, word in enumerate(keys):
            occurrences = self.transitions.get(word)
            if not occurrences:
                # END has no continuation, it goes to itself for consistency
                result[i_word, i_word] = 1
                continue
            for word2, count in occurrences.items():
                result[i_word, keys.index(word2)] = count
            result[i_word] /= result[i_word].sum()
        return result

    def sample_sequence(self, rng, max_length=100):
        """Unconstrained walk from START until END or max_length words."""
        current_seq = []
        word = START
        while len(current_seq) < max_length:
            row = self.transitions.get(word)
            if not row:
                break
            conts = list(row.keys())
            probs = np.array(list(row.values()), dtype=float)
            word = conts[rng.choice(len(conts), p=probs / probs.sum())]
            if word == END:
                break
            current_seq.append(word)
        return current_seq

    def show_structure(self):
        sizes = [len(set(row)) for row in self.transitions.values()]
        print(f"voc size: {self.voc_size()}")
        print(f"number of sequences: {len(self.input_sequences)}")
        if sizes:
            print(f"min order 1 size: {min(sizes)}, max: {max(sizes)}")
