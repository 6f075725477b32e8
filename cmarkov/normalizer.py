"""
Copyright (c) 2025 Ynosound.
All rights reserved.
"""
import numpy as np

from cmarkov.errors import ModelDefectError


def row_weights(row, layer, word):
    weights = np.array(list(row.values()), dtype=float)
    if len(weights) == 0 or weights.sum() <= 0:
        raise ModelDefectError(f"empty row for {word!r} in layer {layer}")
    return weights


def normalize_rows(store):
    """Each row divided by its sum."""
    for layer, matrix in enumerate(store.matrices):
        for word, row in matrix.items():
            weights = row_weights(row, layer, word)
            weights /= weights.sum()
            matrix[word] = dict(zip(row.keys(), weights.tolist()))
    return store


def normalize_pachet(store):
    """Normalization of Pachet, Roy & Barbieri (Finite-length Markov processes
    with constraints, IJCAI 2011).

    Rows are turned back into the transition probabilities of the
    unconstrained model (using their totals before the constraint was
    applied), then rescaled from the last layer backwards:
        p'(a -> b) = p(a -> b) * alpha(b) / alpha(a)
    where alpha(a) is the probability mass of the completions of a that
    survived, ending with END. Sampling then gives every valid sentence the
    same relative probability it has in the unconstrained model, up to the
    prior of its first word.
    """
    last = store.sentence_length - 1
    # the last words still have to go to END
    alpha_next = {word: store.end_probabilities.get(word, 1.0) for word in store.words_at(last)}
    for layer in reversed(range(store.sentence_length)):
        matrix = store.matrices[layer]
        totals = store.row_totals[layer]
        alpha = {}
        for word, row in matrix.items():
            weights = row_weights(row, layer, word)
            probs = weights / (totals.get(word) or weights.sum())
            probs = probs * np.array([alpha_next[next_word] for next_word in row])
            mass = probs.sum()
            if mass <= 0:
                raise ModelDefectError(f"no probability mass left for {word!r} in layer {layer}")
            alpha[word] = mass
            matrix[word] = dict(zip(row.keys(), (probs / mass).tolist()))
        alpha_next = alpha
    return store


NORMALIZERS = {
    "row": normalize_rows,
    "pachet": normalize_pachet,
}


def normalize(store, method="row"):
    if method not in NORMALIZERS:
        raise ValueError(f"unknown normalization {method!r}, expected one of {sorted(NORMALIZERS)}")
    return NORMALIZERS[method](store)
