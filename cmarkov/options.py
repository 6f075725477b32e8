"""
Copyright (c) 2025 Ynosound.
All rights reserved.
"""

NORMALIZATIONS = ("row", "pachet")
LAYER_SOURCES = ("auto", "sequences", "transitions")
WEIGHTINGS = ("count", "probability")


class Options:
    def __init__(self, sequence_count=1, debug=False, seed=None, normalization="row",
                 layer_source="auto", weighting="count", end_on_sentence_end=True):
        if sequence_count < 0:
            raise ValueError(f"sequence_count cannot be negative, got {sequence_count}")
        if normalization not in NORMALIZATIONS:
            raise ValueError(f"unknown normalization {normalization!r}, expected one of {NORMALIZATIONS}")
        if layer_source not in LAYER_SOURCES:
            raise ValueError(f"unknown layer source {layer_source!r}, expected one of {LAYER_SOURCES}")
        if weighting not in WEIGHTINGS:
            raise ValueError(f"unknown weighting {weighting!r}, expected one of {WEIGHTINGS}")
        # number of sentences returned by generate_sentences
        self.sequence_count = sequence_count
        # prints layer sizes while training, and the solution count in print_debug_info
        self.debug = debug
        self.seed = seed
        self.normalization = normalization
        self.layer_source = layer_source
        self.weighting = weighting
        # in "transitions" mode, the last word must be one that ended a training sentence
        self.end_on_sentence_end = end_on_sentence_end

    def __repr__(self):
        return (f"Options(sequence_count={self.sequence_count}, debug={self.debug}, seed={self.seed}, "
                f"normalization={self.normalization!r}, layer_source={self.layer_source!r}, "
                f"weighting={self.weighting!r}, end_on_sentence_end={self.end_on_sentence_end})")
