"""
Copyright (c) 2025 Ynosound.
All rights reserved.
"""
from collections import deque

from cmarkov.errors import NoSolutionError
from cmarkov.markov import START


class ArcConsistencyPruner:
    """Removes every node that cannot be part of a complete START -> END path.

    A node is a (position, word) pair: the word is a target of
    matrix[position] and a source of matrix[position + 1]. A node is dead
    when it has no successor (except at the last position, where END is
    implicit), and useless when nothing reaches it any more. Removing a node
    can kill its predecessors and strand its successors, so nodes go
    through a worklist until nothing changes.
    """

    def prune(self, store):
        """Prunes store in place and returns the number of removed nodes.
        Raises NoSolutionError if START is left without a successor."""
        matrices = store.matrices
        length = store.sentence_length
        predecessors = [self.build_predecessors(matrix) for matrix in matrices]
        worklist = deque()
        for layer, matrix in enumerate(matrices):
            for word, row in matrix.items():
                # empty row: the source, at position layer - 1, is a dead end
                if not row:
                    worklist.append((layer - 1, word))
                # source that nothing points to any more
                elif layer > 0 and word not in predecessors[layer - 1]:
                    worklist.append((layer - 1, word))
        for position in range(length - 1):
            following = matrices[position + 1]
            for word in predecessors[position]:
                if word not in following:
                    worklist.append((position, word))

        removed = 0
        while worklist:
            position, word = worklist.popleft()
            if self.remove_node(store, predecessors, position, word, worklist):
                removed += 1
        if not matrices[0].get(START):
            raise NoSolutionError("no valid first word: the constraint cannot be satisfied")
        return removed

    @staticmethod
    def build_predecessors(matrix):
        predecessors = {}
        for word, row in matrix.items():
            for next_word in row:
                if next_word not in predecessors:
                    predecessors[next_word] = set()
                predecessors[next_word].add(word)
        return predecessors

    @staticmethod
    def remove_node(store, predecessors, position, word, worklist):
        # START is never removed, an empty START row is checked at the end
        if position < 0:
            return False
        matrices = store.matrices
        has_row = position + 1 < store.sentence_length and word in matrices[position + 1]
        if word not in predecessors[position] and not has_row:
            return False
        if has_row:
            for next_word in matrices[position + 1].pop(word):
                sources = predecessors[position + 1][next_word]
                sources.discard(word)
                if not sources:
                    del predecessors[position + 1][next_word]
                    worklist.append((position + 1, next_word))
        for source in predecessors[position].pop(word, ()):
            row = matrices[position][source]
            del row[word]
            if not row:
                worklist.append((position - 1, source))
        store.record_removed(store.removed_by_arc_consistency, position, word)
        return True
