# This source code is part of the gffstream package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Functions for the coordinate ranges of GFF3 entries, e.g. for the
computation of intron locations from a gene and its exons.
"""

__name__ = "gffstream"
__author__ = "The gffstream contributors"
__all__ = ["feature_range", "consecutive_runs", "feature_difference"]

import numpy as np


def feature_range(feature):
    """
    Get the positions covered by a feature.

    Parameters
    ----------
    feature : FeatureRecord
        The feature.

    Returns
    -------
    positions : set of int
        All positions from *start* to *end*, inclusive.

    Examples
    --------

    >>> from gffstream import parse_line
    >>> gene = parse_line("chr1\\t.\\tgene\\t3\\t6\\t.\\t+\\t.\\tID=g")
    >>> print(sorted(feature_range(gene)))
    [3, 4, 5, 6]
    """
    return set(range(feature.get_start(), feature.get_end() + 1))


def consecutive_runs(points):
    """
    Partition integers into runs of consecutive integers.

    Each run is maximal, i.e. two runs cannot be merged into one
    consecutive run.

    Parameters
    ----------
    points : iterable object of int
        The integers, in arbitrary order.

    Yields
    ------
    run : list of int
        The next run, in ascending order.
        The runs are yielded in ascending order.

    Examples
    --------

    >>> print(list(consecutive_runs({7, 1, 2, 3, 5, 8})))
    [[1, 2, 3], [5], [7, 8]]
    """
    # 'np.unique()' also sorts
    points = np.unique(np.fromiter(points, dtype=np.int64))
    if len(points) == 0:
        return
    # Split at each gap between neighbors
    gaps = np.where(np.diff(points) != 1)[0] + 1
    for run in np.split(points, gaps):
        yield run.tolist()


def feature_difference(feature, others):
    """
    Get the parts of a feature that are not covered by any of the
    other features.

    Parameters
    ----------
    feature : FeatureRecord
        The feature.
    others : iterable object of FeatureRecord
        The features whose positions are removed from `feature`.

    Returns
    -------
    ranges : list of tuple(int, int)
        The first and last position of each uncovered part,
        in ascending order.
        Empty, if `feature` is completely covered.

    Examples
    --------

    Compute the introns of a gene:

    >>> from gffstream import parse_line
    >>> gene = parse_line("chr1\\t.\\tgene\\t1\\t100\\t.\\t+\\t.\\tID=g")
    >>> exon1 = parse_line("chr1\\t.\\texon\\t1\\t20\\t.\\t+\\t.\\tParent=g")
    >>> exon2 = parse_line("chr1\\t.\\texon\\t51\\t100\\t.\\t+\\t.\\tParent=g")
    >>> print(feature_difference(gene, [exon1, exon2]))
    [(21, 50)]
    """
    positions = np.arange(feature.get_start(), feature.get_end() + 1)
    for other in others:
        positions = positions[
            (positions < other.get_start()) | (positions > other.get_end())
        ]
    return [(run[0], run[-1]) for run in consecutive_runs(positions)]
