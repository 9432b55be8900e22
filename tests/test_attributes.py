# This source code is part of the gffstream package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import pytest
import gffstream


@pytest.mark.parametrize("raw, ref_attributes", [
    ("ID=gene1", {"id": ["gene1"]}),
    ("ID=gene1;Name=g1,g2", {"id": ["gene1"], "name": ["g1", "g2"]}),
    # Case of keys is normalized
    ("Parent=mrna1;PARENT=mrna2", {"parent": ["mrna2"]}),
    # Only the first '=' separates key and value
    ("Note=a=b", {"note": ["a=b"]}),
    # Trailing semicolon
    ("ID=gene1;", {"id": ["gene1"]}),
    ("Note=", {"note": [""]}),
    (".", {}),
])
def test_decode(raw, ref_attributes):
    assert gffstream.decode_attributes(raw) == ref_attributes


def test_duplicate_keys():
    """
    Repeated keys are not merged, the last occurrence wins.
    """
    attributes = gffstream.decode_attributes("Alias=a,b;ID=x;Alias=c")
    assert attributes == {"alias": ["c"], "id": ["x"]}
    # The position of the first occurrence is kept
    assert list(attributes) == ["alias", "id"]


@pytest.mark.parametrize("raw", ["ID", "ID=gene1;Name", "ID=gene1;;x"])
def test_decode_malformed(raw):
    with pytest.raises(gffstream.MalformedRecordError):
        gffstream.decode_attributes(raw)


def test_encode():
    assert gffstream.encode_attributes(
        {"id": ["gene1"], "name": ["g1", "g2"]}
    ) == "id=gene1;name=g1,g2"
    assert gffstream.encode_attributes({}) == "."


@pytest.mark.parametrize("raw", [
    "id=gene1;name=g1,g2",
    "parent=mrna1,mrna2;note=some text with spaces",
    ".",
])
def test_encode_decoded(raw):
    """
    Encoding decoded attributes restores the original text, as long as
    the keys are lower-case.
    """
    assert gffstream.encode_attributes(gffstream.decode_attributes(raw)) \
        == raw


def test_encode_keeps_values_not_key_case():
    attributes = gffstream.decode_attributes("ID=Gene1;Name=G1")
    assert gffstream.encode_attributes(attributes) == "id=Gene1;name=G1"
