# This source code is part of the gffstream package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

from os.path import join
import pytest
import gffstream
from .util import data_dir


SEQ_REGION = gffstream.Directive("sequence-region", "chr1 1 10000")
RESOLVED = gffstream.Directive(gffstream.RESOLVED)


def _feature(type, id, start=1, end=100):
    return gffstream.FeatureRecord(
        "chr1", "test", type, start, end, None, "+", None, {"id": [id]}
    )


def _ids(blocks):
    return [
        [
            element.name if element.is_directive()
            else gffstream.get_attribute(element, "id")[0]
            for element in block
        ]
        for block in blocks
    ]


def test_two_genes():
    gene1 = _feature("gene", "gene1")
    exon1a = _feature("exon", "exon1a")
    exon1b = _feature("exon", "exon1b")
    gene2 = _feature("gene", "gene2")
    exon2a = _feature("exon", "exon2a")
    elements = [SEQ_REGION, gene1, exon1a, exon1b, gene2, exon2a, RESOLVED]
    blocks = list(gffstream.gene_blocks(elements))
    assert blocks == [
        [SEQ_REGION, gene1, exon1a, exon1b],
        [gene2, exon2a],
    ]


@pytest.mark.parametrize("elements, ref_ids", [
    # Empty input
    ([], []),
    # No gene and no sequence region
    ([_feature("exon", "e1"), RESOLVED], []),
    # Leading elements are skipped
    (
        [gffstream.Directive("gff-version", "3"), _feature("exon", "e0"),
         _feature("gene", "g1"), _feature("exon", "e1")],
        [["g1", "e1"]]
    ),
    # No sequence region
    (
        [_feature("gene", "g1"), _feature("mRNA", "m1"),
         _feature("gene", "g2")],
        [["g1", "m1"], ["g2"]]
    ),
    # Resolution directive closes the block,
    # elements up to the next gene belong to the next block
    (
        [_feature("gene", "g1"), _feature("exon", "e1"), RESOLVED,
         _feature("exon", "e2"), _feature("gene", "g2")],
        [["g1", "e1"], ["#", "e2", "g2"]]
    ),
    # A sequence region after the children belongs to the previous block
    (
        [_feature("gene", "g1"), SEQ_REGION, _feature("gene", "g2"),
         _feature("exon", "e2")],
        [["g1", "sequence-region"], ["g2", "e2"]]
    ),
    # Sequence region without gene
    (
        [SEQ_REGION, RESOLVED],
        [["sequence-region"]]
    ),
    (
        [SEQ_REGION, RESOLVED, _feature("gene", "g1")],
        [["sequence-region"], ["#", "g1"]]
    ),
    # Trailing elements without gene are dropped
    (
        [_feature("gene", "g1"), RESOLVED, _feature("exon", "e9")],
        [["g1"]]
    ),
])
def test_segmentation(elements, ref_ids):
    assert _ids(gffstream.gene_blocks(elements)) == ref_ids


def test_gene_type():
    elements = [
        _feature("gene", "g1"),
        _feature("pseudogene", "p1"),
        _feature("exon", "e1"),
        _feature("pseudogene", "p2"),
    ]
    blocks = gffstream.gene_blocks(elements, gene_type="pseudogene")
    assert _ids(blocks) == [["p1", "e1"], ["p2"]]


def test_laziness():
    """
    The stream is only consumed as far as necessary for the requested
    block.
    """
    consumed = []

    def stream():
        for element in [
            _feature("gene", "g1"), _feature("exon", "e1"),
            _feature("gene", "g2"), _feature("exon", "e2"),
        ]:
            consumed.append(element)
            yield element

    blocks = gffstream.gene_blocks(stream())
    assert consumed == []
    next(blocks)
    # The first element of the next block is looked ahead
    assert len(consumed) == 3
    next(blocks)
    assert len(consumed) == 4
    with pytest.raises(StopIteration):
        next(blocks)


def test_file():
    """
    Segment a file and check that a malformed line raises an error
    when the block containing it is requested.
    """
    with gffstream.GFFReader(join(data_dir(), "wormbase.gff3")) as reader:
        blocks = list(gffstream.gene_blocks(reader.records()))
        assert reader.resolved
    assert len(blocks) == 2
    assert blocks[0][0].is_sequence_region()
    assert [element.type for element in blocks[0][1:]] \
        == ["gene", "mRNA", "exon", "exon", "CDS", "CDS"]
    assert [element.type for element in blocks[1]] == ["gene", "exon"]

    blocks = gffstream.gene_blocks(
        gffstream.read_records(join(data_dir(), "malformed.gff3"))
    )
    with pytest.raises(gffstream.MalformedRecordError):
        next(blocks)


def test_introns_of_blocks():
    """
    Compute the introns of each gene block.
    """
    with gffstream.GFFReader(join(data_dir(), "wormbase.gff3")) as reader:
        introns = []
        for block in gffstream.gene_blocks(reader.records()):
            genes = [element for element in block if element.is_gene()]
            exons = [
                element for element in block
                if not element.is_directive() and element.is_exon()
            ]
            introns.append(gffstream.feature_difference(genes[0], exons))
    assert introns == [[(101, 200)], []]


def test_invalid_element():
    """
    A ``None`` value in the stream, e.g. a comment line passed through
    :func:`parse_line()`, raises an error instead of ending the
    segmentation.
    """
    lines = [
        "chr1\tsrc\tgene\t1\t10\t.\t+\t.\tID=g1",
        "# A comment",
        "chr1\tsrc\tgene\t20\t30\t.\t+\t.\tID=g2",
    ]
    elements = [gffstream.parse_line(line) for line in lines]
    with pytest.raises(AttributeError):
        list(gffstream.gene_blocks(elements))
