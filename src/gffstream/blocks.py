# This source code is part of the gffstream package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "gffstream"
__author__ = "The gffstream contributors"
__all__ = ["GeneBlockIterator", "gene_blocks"]

import logging


logger = logging.getLogger(__name__)

# Marks the end of the element stream
_END = object()


class GeneBlockIterator:
    """
    An iterator that groups a stream of GFF3 entries and directives
    into blocks, each containing one gene and its child features.

    A block starts at a gene entry, optionally preceded by a
    ``##sequence-region`` directive.
    It ends before the next gene entry or before the resolution
    directive (``###``).
    Elements before the first gene entry or ``##sequence-region``
    directive are skipped.

    Only a single block is held in memory at a time.
    Use :func:`gene_blocks()` to create this iterator.

    Parameters
    ----------
    elements : iterable object of FeatureRecord or Directive
        The stream of elements, e.g. from :meth:`GFFReader.records()`.
    gene_type : str, optional
        The *type* of the entries that start a new block.
    """

    def __init__(self, elements, gene_type="gene"):
        self._elements = iter(elements)
        self._gene_type = gene_type
        # The first element of the remaining stream,
        # that was already taken from the underlying iterator
        self._next_element = _END
        self._finished = False
        self._started = False

    def __iter__(self):
        return self

    def __next__(self):
        if not self._started:
            self._started = True
            self._skip_to_first_marker()
        if self._finished:
            raise StopIteration
        block = []
        has_marker = False
        has_gene = False
        while True:
            element = self._pop()
            if element is _END:
                # End of stream
                self._finished = True
                if not has_marker:
                    raise StopIteration
                break
            if has_gene:
                if self._is_gene(element) or element.is_resolved():
                    self._push(element)
                    break
            elif self._is_gene(element):
                has_marker = True
                has_gene = True
            elif element.is_sequence_region():
                has_marker = True
            elif element.is_resolved() and has_marker:
                # Sequence region without gene
                self._push(element)
                break
            block.append(element)
        logger.debug("Created gene block with %d elements", len(block))
        return block

    def _is_gene(self, element):
        return not element.is_directive() and element.type == self._gene_type

    def _skip_to_first_marker(self):
        while True:
            element = self._pop()
            if element is _END:
                self._finished = True
                return
            if self._is_gene(element) or element.is_sequence_region():
                self._push(element)
                return

    def _pop(self):
        if self._next_element is not _END:
            element = self._next_element
            self._next_element = _END
            return element
        return next(self._elements, _END)

    def _push(self, element):
        self._next_element = element


def gene_blocks(elements, gene_type="gene"):
    """
    Group a stream of GFF3 entries and directives into blocks, each
    containing one gene and its child features.

    Each block consists of

        - a *prefix*: the elements up to and including the next gene
          entry, which may include a preceding ``##sequence-region``
          directive,
        - and a *suffix*: all following elements up to the next gene
          entry or resolution directive (``###``).

    The next block starts with the element that terminated the
    previous block.
    If the remaining stream contains neither a gene entry nor a
    ``##sequence-region`` directive, the iteration ends.

    The blocks are created lazily, i.e. the stream is consumed only as
    far as necessary for the requested block.

    Parameters
    ----------
    elements : iterable object of FeatureRecord or Directive
        The stream of elements, e.g. from :meth:`GFFReader.records()`.
        ``None`` values, as returned by :func:`parse_line()` for
        comments and blank lines, are not allowed.
    gene_type : str, optional
        The *type* of the entries that start a new block.

    Returns
    -------
    blocks : GeneBlockIterator
        An iterator over the blocks, each block is a list of elements.

    Examples
    --------

    >>> from gffstream import parse_line
    >>> lines = [
    ...     "##sequence-region chr1 1 1000",
    ...     "chr1\\t.\\tgene\\t1\\t100\\t.\\t+\\t.\\tID=g1",
    ...     "chr1\\t.\\texon\\t1\\t100\\t.\\t+\\t.\\tParent=g1",
    ...     "chr1\\t.\\tgene\\t201\\t300\\t.\\t+\\t.\\tID=g2",
    ...     "###",
    ... ]
    >>> for block in gene_blocks([parse_line(line) for line in lines]):
    ...     print([element.type if not element.is_directive() else element.name
    ...            for element in block])
    ['sequence-region', 'gene', 'exon']
    ['gene']
    """
    return GeneBlockIterator(elements, gene_type)
