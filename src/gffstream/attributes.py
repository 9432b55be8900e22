# This source code is part of the gffstream package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "gffstream"
__author__ = "The gffstream contributors"
__all__ = ["decode_attributes", "encode_attributes", "normalize_key"]

from .file import MalformedRecordError


# Placeholder for an empty column in GFF3
EMPTY = "."


def normalize_key(key):
    """
    Bring an attribute key into its canonical form.

    Attribute keys are compared case-insensitively:
    the canonical form is the lower-case key.

    Parameters
    ----------
    key : str
        The attribute key.

    Returns
    -------
    normalized_key : str
        The lower-case key.
    """
    return key.lower()


def decode_attributes(raw):
    """
    Parse the *attributes* column of a GFF3 entry into a dictionary.

    The column is split into ``key=value`` pairs at each ``;``.
    Each pair is split at the first ``=`` and the value is split into
    multiple values at each ``,``.

    Parameters
    ----------
    raw : str
        The content of the *attributes* column.

    Returns
    -------
    attributes : dict
        Maps the lower-case keys to the list of values.
        If a key appears multiple times, the last occurrence wins.
        The empty column (``.``) gives an empty dictionary.

    Raises
    ------
    MalformedRecordError
        If a pair does not contain ``=``.

    Examples
    --------

    >>> print(decode_attributes("ID=gene1;Name=g1,g2"))
    {'id': ['gene1'], 'name': ['g1', 'g2']}
    """
    attributes = {}
    if raw == EMPTY:
        return attributes
    for entry in raw.split(";"):
        if len(entry) == 0:
            # E.g. trailing semicolon
            continue
        key, sep, values = entry.partition("=")
        if not sep:
            raise MalformedRecordError(
                f"Attribute entry '{entry}' is invalid"
            )
        attributes[normalize_key(key)] = values.split(",")
    return attributes


def encode_attributes(attributes):
    """
    Create the *attributes* column of a GFF3 entry from a dictionary.

    This is the inverse of :func:`decode_attributes()`, except that the
    original case of the keys is not restored.

    Parameters
    ----------
    attributes : dict
        Maps keys to a list of values.

    Returns
    -------
    raw : str
        The content of the *attributes* column.
        An empty dictionary gives the empty column (``.``).

    Examples
    --------

    >>> print(encode_attributes({"id": ["gene1"], "name": ["g1", "g2"]}))
    id=gene1;name=g1,g2
    """
    if len(attributes) == 0:
        return EMPTY
    return ";".join(
        [key + "=" + ",".join(values) for key, values in attributes.items()]
    )
