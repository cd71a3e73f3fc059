"""
Multiplicity factors for symmetric index tuples.

A stored edge of a super-symmetric tensor stands for every distinct ordering
of its indices. The number of such orderings is the multinomial coefficient of
the multiplicities of its values, e.g. [1, 1, 2] -> 3!/(2! 1!) = 3.
"""

from collections import Counter

from scipy.special import factorial


def multinomial(counts):
    """
    Multinomial coefficient (c_1 + ... + c_m)! / (c_1! ... c_m!).

    Parameters:
    -----------
    counts : iterable of int
        Non-negative counts

    Returns:
    --------
    coefficient : int
    """
    counts = [int(c) for c in counts]
    if any(c < 0 for c in counts):
        raise ValueError(f"Counts must be non-negative, got {counts}")

    coefficient = int(factorial(sum(counts), exact=True))
    for c in counts:
        coefficient //= int(factorial(c, exact=True))
    return coefficient


def multiplicity_factor(indices):
    """
    Number of distinct orderings of an index tuple.

    This is the scale needed so that summing over unique sub-edges gives the
    same result as summing over every permutation of a dense tensor.

    Parameters:
    -----------
    indices : sequence of int
        Index tuple (order does not matter). An empty tuple, which is the
        sub-edge of an order-1 tensor, has factor 1.

    Returns:
    --------
    factor : int
    """
    if len(indices) == 0:
        return 1
    return multinomial(Counter(indices).values())
