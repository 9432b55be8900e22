# This source code is part of the gffstream package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "gffstream"
__author__ = "The gffstream contributors"
__all__ = [
    "RESOLVED",
    "StreamElement",
    "FeatureRecord",
    "Directive",
    "to_text",
    "as_integer",
    "as_float",
    "as_seq_region",
    "get_attribute",
]

import abc
import copy
from .attributes import EMPTY, encode_attributes, normalize_key
from .file import MalformedRecordError, NumericFormatError


# Name of the resolution directive ('###')
# Parsed directive names never start with '#', hence no collision
RESOLVED = "#"


class StreamElement(metaclass=abc.ABCMeta):
    """
    Base class for the elements of a GFF3 record stream:
    :class:`FeatureRecord` and :class:`Directive`.

    The set of subclasses is closed, i.e. :func:`to_text()` only
    supports these two classes.
    """

    @abc.abstractmethod
    def is_directive(self):
        pass

    def is_resolved(self):
        """
        Check whether this element is the resolution directive
        (``###``), i.e. whether all forward references up to this
        element are resolved.

        Returns
        -------
        resolved : bool
            True, if this element is the resolution directive.
        """
        return False

    def is_gene(self):
        return False

    def is_sequence_region(self):
        return False

    def __str__(self):
        return to_text(self)


class FeatureRecord(StreamElement):
    """
    A single entry of a GFF3 file, i.e. a line describing a feature.

    All columns except *attributes* are stored as text, as they appear
    in the file.
    The numeric columns are only converted on request via
    :meth:`get_start()`, :meth:`get_end()`, :meth:`get_score()` and
    :meth:`get_phase()`.
    Hence, a malformed numeric column does not prevent access to the
    other columns.

    Objects of this class are immutable.

    Parameters
    ----------
    seqid, source, type : str
        The ID of the reference sequence, the source of the data
        (e.g. ``Genbank``) and the type of the feature (e.g. ``CDS``).
    start, end : str or int
        The 1-based inclusive coordinates of the feature.
    score : str or float or None
        Optional score (e.g. an E-value).
        ``None`` is stored as ``'.'``.
    strand : str
        One of ``'+'``, ``'-'``, ``'.'`` or ``'?'``.
    phase : str or int or None
        Reading frame shift, ``None`` (``'.'``) for non-CDS features.
    attributes : dict
        Maps attribute keys to a list of values.

    Attributes
    ----------
    seqid, source, type, start, end, score, strand, phase : str
        The columns of the entry.
    attributes : dict
        A copy of the attribute dictionary.

    Examples
    --------

    >>> record = FeatureRecord(
    ...     "chr1", "WormBase", "gene", "25", "387", ".", "-", ".",
    ...     {"id": ["gene1"]}
    ... )
    >>> print(record.start)
    25
    >>> print(record.get_start() + 1)
    26
    >>> print(record)   #doctest: +NORMALIZE_WHITESPACE
    chr1	WormBase	gene	25	387	.	-	.	id=gene1
    """

    def __init__(self, seqid, source, type, start, end,
                 score, strand, phase, attributes):
        self._seqid = seqid
        self._source = source
        self._type = type
        self._start = _to_column(start)
        self._end = _to_column(end)
        self._score = _to_column(score)
        self._strand = strand
        self._phase = _to_column(phase)
        self._attributes = {
            key: [values] if isinstance(values, str) else list(values)
            for key, values in attributes.items()
        }

    def __repr__(self):
        return (
            f"FeatureRecord({self._seqid!r}, {self._source!r}, "
            f"{self._type!r}, {self._start!r}, {self._end!r}, "
            f"{self._score!r}, {self._strand!r}, {self._phase!r}, "
            f"{self._attributes!r})"
        )

    @property
    def seqid(self):
        return self._seqid

    @property
    def source(self):
        return self._source

    @property
    def type(self):
        return self._type

    @property
    def start(self):
        return self._start

    @property
    def end(self):
        return self._end

    @property
    def score(self):
        return self._score

    @property
    def strand(self):
        return self._strand

    @property
    def phase(self):
        return self._phase

    @property
    def attributes(self):
        return copy.deepcopy(self._attributes)

    def get_start(self):
        """
        Get the start coordinate as integer.

        Returns
        -------
        start : int
            The start coordinate.

        Raises
        ------
        NumericFormatError
            If the *start* column is not an integer.
        """
        return as_integer(self._start)

    def get_end(self):
        """
        Get the (inclusive) end coordinate as integer.

        Returns
        -------
        end : int
            The end coordinate.

        Raises
        ------
        NumericFormatError
            If the *end* column is not an integer.
        """
        return as_integer(self._end)

    def get_score(self):
        """
        Get the score as float.

        Returns
        -------
        score : float or None
            The score, ``None`` if the *score* column is empty.
        """
        if self._score == EMPTY:
            return None
        return as_float(self._score)

    def get_phase(self):
        """
        Get the phase (0, 1 or 2) as integer.

        Returns
        -------
        phase : int or None
            The phase, ``None`` if the *phase* column is empty.
        """
        if self._phase == EMPTY:
            return None
        return as_integer(self._phase)

    def is_directive(self):
        return False

    def is_gene(self):
        return self._type == "gene"

    def is_cds(self):
        return self._type == "CDS"

    def is_exon(self):
        return self._type == "exon"

    def __eq__(self, item):
        if not isinstance(item, FeatureRecord):
            return False
        return (
            self._seqid == item._seqid
            and self._source == item._source
            and self._type == item._type
            and self._start == item._start
            and self._end == item._end
            and self._score == item._score
            and self._strand == item._strand
            and self._phase == item._phase
            and self._attributes == item._attributes
        )

    def __hash__(self):
        return hash((
            self._seqid, self._source, self._type, self._start, self._end,
            self._score, self._strand, self._phase,
            frozenset(
                (key, tuple(values))
                for key, values in self._attributes.items()
            )
        ))


class Directive(StreamElement):
    """
    A directive line of a GFF3 file, i.e. a line starting with ``##``.

    The special directive ``###`` indicates, that all forward
    references of the preceding entries are resolved.
    It is represented by a directive with the name :attr:`RESOLVED`
    and no data.

    Objects of this class are immutable.

    Parameters
    ----------
    name : str
        The name of the directive (without ``##``),
        e.g. ``'sequence-region'``.
    data : str, optional
        The text following the name.
        Must be omitted for the resolution directive.

    Attributes
    ----------
    name, data
        Same as the parameters.

    Examples
    --------

    >>> print(Directive("gff-version", "3"))   #doctest: +NORMALIZE_WHITESPACE
    ##gff-version	3
    >>> print(Directive(RESOLVED))
    ###
    """

    def __init__(self, name, data=None):
        if name == RESOLVED and data is not None:
            raise ValueError("The resolution directive cannot have data")
        self._name = name
        self._data = data

    def __repr__(self):
        return f"Directive({self._name!r}, {self._data!r})"

    @property
    def name(self):
        return self._name

    @property
    def data(self):
        return self._data

    def is_directive(self):
        return True

    def is_resolved(self):
        return self._name == RESOLVED

    def is_sequence_region(self):
        return self._name == "sequence-region"

    def __eq__(self, item):
        if not isinstance(item, Directive):
            return False
        return self._name == item._name and self._data == item._data

    def __hash__(self):
        return hash((self._name, self._data))


def to_text(element):
    """
    Create the GFF3 line for a stream element.

    Parameters
    ----------
    element : FeatureRecord or Directive
        The element to be converted.

    Returns
    -------
    line : str
        The line without line break.
        A :class:`FeatureRecord` gives the 9 tab separated columns,
        a :class:`Directive` gives ``##<name>\\t<data>`` or ``###``.
    """
    if isinstance(element, FeatureRecord):
        return "\t".join([
            element.seqid, element.source, element.type,
            element.start, element.end, element.score,
            element.strand, element.phase,
            encode_attributes(element._attributes)
        ])
    elif isinstance(element, Directive):
        if element.is_resolved():
            return "###"
        if not element.data:
            return "##" + element.name
        return "##" + element.name + "\t" + element.data
    else:
        raise TypeError(
            f"Expected 'FeatureRecord' or 'Directive', "
            f"but got '{type(element).__name__}'"
        )


def as_integer(text):
    """
    Convert the text of a numeric column into an integer.

    Parameters
    ----------
    text : str
        The column text.

    Returns
    -------
    value : int
        The converted value.

    Raises
    ------
    NumericFormatError
        If `text` is not an integer.
    """
    try:
        return int(text)
    except ValueError:
        raise NumericFormatError(f"'{text}' is not an integer") from None


def as_float(text):
    """
    Convert the text of a numeric column into a float.

    Parameters
    ----------
    text : str
        The column text.

    Returns
    -------
    value : float
        The converted value.

    Raises
    ------
    NumericFormatError
        If `text` is not a number.
    """
    try:
        return float(text)
    except ValueError:
        raise NumericFormatError(f"'{text}' is not a number") from None


def as_seq_region(directive):
    """
    Get the reference sequence and its boundaries from a
    ``##sequence-region`` directive.

    Parameters
    ----------
    directive : StreamElement
        The element to be inspected.

    Returns
    -------
    seq_region : tuple(str, int, int) or None
        The *seqid*, the *start* and the *end* of the sequence region.
        ``None``, if the element is not a ``##sequence-region``
        directive.

    Raises
    ------
    MalformedRecordError
        If the directive does not contain the three fields.

    Examples
    --------

    >>> print(as_seq_region(Directive("sequence-region", "KI1\\t1\\t1890151")))
    ('KI1', 1, 1890151)
    >>> print(as_seq_region(Directive("gff-version", "3")))
    None
    """
    if not directive.is_sequence_region():
        return None
    fields = directive.data.split() if directive.data else []
    if len(fields) != 3:
        raise MalformedRecordError(
            f"Expected 3 fields in sequence region, but got {len(fields)}"
        )
    seqid, start, end = fields
    return seqid, as_integer(start), as_integer(end)


def get_attribute(record, key):
    """
    Get the values of an attribute.

    Parameters
    ----------
    record : FeatureRecord
        The record to get the attribute from.
    key : str
        The attribute key.
        It is case-insensitive.

    Returns
    -------
    values : list of str
        The values of the attribute.
        Empty, if the record has no such attribute.
    """
    return list(record._attributes.get(normalize_key(key), []))


def _to_column(value):
    if value is None:
        return EMPTY
    return str(value)
