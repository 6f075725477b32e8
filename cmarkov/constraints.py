"""
Copyright (c) 2025 Ynosound.
All rights reserved.
"""
import re
from abc import ABC, abstractmethod

import textstat

from cmarkov.transitions import SENTINELS

WILDCARD = "*"


class ConstraintPolicy(ABC):
    """Decides, edge by edge, what survives in the layered matrices.

    A constraint is an ordered sequence of tokens, one per position unless the
    policy says otherwise. Policies only look at the layer index and the two
    words of an edge, so the same constraint on the same matrices always
    deletes the same edges.
    """

    name = None

    def sentence_length(self, constraint):
        return len(constraint)

    @abstractmethod
    def allows(self, layer, word, next_word, constraint):
        """True if the edge word -> next_word, which puts next_word at
        position `layer`, is compatible with the constraint."""

    def apply(self, store, constraint):
        """Deletes the violating edges of store in place. A word that no
        longer appears anywhere in a layer is recorded as removed by the
        constraint."""
        for layer, matrix in enumerate(store.matrices):
            before = store.words_at(layer)
            for word, row in matrix.items():
                for next_word in list(row):
                    if next_word in SENTINELS or not self.allows(layer, word, next_word, constraint):
                        del row[next_word]
            remaining = set(store.words_at(layer))
            for word in before:
                if word not in remaining:
                    store.record_removed(store.removed_by_constraint, layer, word)
        return store


class LengthConstraint(ConstraintPolicy):
    """Only the number of tokens matters."""

    name = "length"

    def allows(self, layer, word, next_word, constraint):
        return True


def parse_word_token(token):
    """'*' -> (None, False), 'a|b' -> ({a, b}, False), '!a|b' -> ({a, b}, True)"""
    if token == WILDCARD:
        return None, False
    negated = token.startswith("!")
    if negated:
        token = token[1:]
    return set(token.split("|")), negated


class LexicalConstraint(ConstraintPolicy):
    """One token per position: a word, alternatives 'a|b', a forbidden
    list '!a|b', or '*' for anything."""

    name = "lexical"

    def __init__(self):
        self._parsed = {}

    def parsed(self, constraint):
        key = tuple(constraint)
        if key not in self._parsed:
            self._parsed[key] = [parse_word_token(token) for token in constraint]
        return self._parsed[key]

    def allows(self, layer, word, next_word, constraint):
        words, negated = self.parsed(constraint)[layer]
        if words is None:
            return True
        return (next_word in words) != negated


class PatternConstraint(ConstraintPolicy):
    """One regular expression per position, matched against the whole word."""

    name = "pattern"

    def __init__(self, flags=0):
        self.flags = flags
        self._compiled = {}

    def compiled(self, constraint):
        key = tuple(constraint)
        if key not in self._compiled:
            self._compiled[key] = [None if token == WILDCARD else re.compile(token, self.flags)
                                   for token in constraint]
        return self._compiled[key]

    def allows(self, layer, word, next_word, constraint):
        pattern = self.compiled(constraint)[layer]
        return pattern is None or pattern.fullmatch(next_word) is not None


class SyllableConstraint(ConstraintPolicy):
    """One syllable count per position, e.g. ['1', '2', '*']."""

    name = "syllables"

    def __init__(self, syllable_counter=textstat.syllable_count):
        self.syllable_counter = syllable_counter

    def allows(self, layer, word, next_word, constraint):
        token = constraint[layer]
        if token == WILDCARD:
            return True
        return self.syllable_counter(next_word) == int(token)


class ForbiddenPairConstraint(ConstraintPolicy):
    """Forbids some adjacent pairs anywhere. Tokens only fix the length."""

    name = "forbidden_pairs"

    def __init__(self, pairs=()):
        self.pairs = {tuple(pair) for pair in pairs}

    def allows(self, layer, word, next_word, constraint):
        return (word, next_word) not in self.pairs


class CompositeConstraint(ConstraintPolicy):
    """An edge survives only if all the policies let it through.
    The length is given by the first policy."""

    name = "all"

    def __init__(self, policies=()):
        if not policies:
            raise ValueError("a composite constraint needs at least one policy")
        self.policies = list(policies)

    def sentence_length(self, constraint):
        return self.policies[0].sentence_length(constraint)

    def allows(self, layer, word, next_word, constraint):
        return all(policy.allows(layer, word, next_word, constraint) for policy in self.policies)


CONSTRAINT_POLICIES = {
    policy.name: policy
    for policy in (LengthConstraint, LexicalConstraint, PatternConstraint, SyllableConstraint,
                   ForbiddenPairConstraint, CompositeConstraint)
}


def make_constraint_policy(kind, **kwargs):
    if isinstance(kind, ConstraintPolicy):
        return kind
    if kind not in CONSTRAINT_POLICIES:
        raise ValueError(f"unknown constraint kind {kind!r}, expected one of {sorted(CONSTRAINT_POLICIES)}")
    return CONSTRAINT_POLICIES[kind](**kwargs)
