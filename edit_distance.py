from collections.abc import Sequence

import numpy as np


def _as_indexable(seq):
    # Strings and real sequences index in constant time; anything else (generators, sets of
    # characters from a reader, numpy arrays) is materialized once as a tuple.
    if isinstance(seq, (str, Sequence)):
        return seq
    return tuple(seq)


class EditDistance:
    def levenshtein_distance(self, s1, s2) -> int:
        """
        Minimum number of single-character insertions, deletions and substitutions
        needed to turn s1 into s2.

        Uses a single working row of min(len(s1), len(s2)) + 1 integers and one carried
        value, so memory stays linear in the shorter input.
        """
        s1, s2 = _as_indexable(s1), _as_indexable(s2)

        # Empty inputs: every character of the other sequence is an insertion.
        if not len(s1): return len(s2)
        if not len(s2): return len(s1)

        # Ensure s1 is the shorter sequence so the working row is as small as possible.
        if len(s1) > len(s2): s1, s2 = s2, s1

        # row[x] is the distance from the empty prefix of s2 to the first x characters of s1.
        row = np.arange(len(s1) + 1)

        for y, c2 in enumerate(s2):
            # last holds the previous row's row[0]; the first column is always y + 1 insertions.
            last, row[0] = row[0], y + 1

            for x, c1 in enumerate(s1):
                # Invariant: last == distance(s1[:x], s2[:y]), the diagonal cell.
                # row[x] is already this row's value (left), row[x + 1] is still the previous row's (up).
                if c1 == c2:
                    last, row[x + 1] = row[x + 1], last
                else:
                    up = row[x + 1]
                    row[x + 1] = 1 + min(last, row[x], up)
                    last = up

        return int(row[-1])


_calculator = EditDistance()


def distance(a, b) -> int:
    """Levenshtein distance between a and b."""
    return _calculator.levenshtein_distance(a, b)


# Example usage
if __name__ == "__main__":
    s1, s2 = "it was the best of times", "more money more times"
    print("Levenshtein Distance:", distance(s1, s2))
