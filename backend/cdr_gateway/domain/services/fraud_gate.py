"""
Fraud Gate
Pass/reject decision on a classifier fraud score
"""


def passes(score: int, threshold: int) -> bool:
    """
    True when the score is within the threshold.

    A score strictly greater than the threshold fails; a score equal to it
    passes.
    """
    return score <= threshold
