"""Shared pytest fixtures for the cmarkov test suite."""

import pytest

from cmarkov.constrained_markov import ConstrainedMarkov
from cmarkov.markov import END, START, MarkovModel

CORPUS = [
    "the cat sat on the mat",
    "the dog sat on the log",
    "a cat ran to the door",
    "the dog ran to a cat",
    "a bird sang in the tree",
    "the bird sat on a branch",
    "the cat sat",
    "the dog sat",
    "a dog ran",
]


@pytest.fixture
def corpus() -> list[list[str]]:
    return [line.split() for line in CORPUS]


@pytest.fixture
def base_model(corpus) -> MarkovModel:
    return MarkovModel(corpus)


@pytest.fixture
def toy_model() -> ConstrainedMarkov:
    """The cat sat / the dog sat example, no constraint besides the length."""
    base = MarkovModel([["the", "cat", "sat"], ["the", "dog", "sat"]])
    return ConstrainedMarkov().train(base, 3)


@pytest.fixture
def pachet_base() -> dict:
    """Bare transition mapping where 'c' can also go to 'x', which cannot end
    a sentence. Valid 3-word sentences: a b d, a b e, a c d."""
    return {
        START: {"a": 1},
        "a": {"b": 1, "c": 1},
        "b": {"d": 1, "e": 1},
        "c": {"d": 1, "x": 1},
        "x": {"d": 1},
        "d": {END: 1},
        "e": {END: 1},
    }
