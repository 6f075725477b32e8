"""
Copyright (c) 2025 Ynosound.
All rights reserved.
"""


class NoSolutionError(Exception):
    """The constraint leaves no complete sequence in the model."""


class ModelDefectError(RuntimeError):
    """An empty row survived pruning. Should never happen."""


class NotTrainedError(RuntimeError):
    pass
