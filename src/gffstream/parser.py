# This source code is part of the gffstream package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "gffstream"
__author__ = "The gffstream contributors"
__all__ = ["parse_line", "parse_record", "parse_directive"]

import re
import warnings
from .attributes import decode_attributes
from .file import MalformedRecordError
from .records import RESOLVED, FeatureRecord, Directive


_DIRECTIVE_PATTERN = re.compile(r"##([^\s#]\S*)(?:\s+(.*))?$")


def parse_line(line):
    """
    Classify a line of a GFF3 file and parse it.

    Leading and trailing whitespace is ignored.

    Parameters
    ----------
    line : str
        The line to be parsed.

    Returns
    -------
    element : FeatureRecord or Directive or None
        ``None`` for blank lines and comments (``#...``),
        a :class:`Directive` for ``###`` and ``##...`` lines,
        a :class:`FeatureRecord` otherwise.

    Raises
    ------
    MalformedRecordError
        If a feature line is malformed.

    Examples
    --------

    >>> print(parse_line("# A comment"))
    None
    >>> print(repr(parse_line("##sequence-region KI1 1 1890151")))
    Directive('sequence-region', 'KI1 1 1890151')
    >>> print(parse_line("###").is_resolved())
    True
    """
    line = line.strip()
    if len(line) == 0:
        return None
    if line == "###":
        return Directive(RESOLVED)
    if line.startswith("#"):
        if line.startswith("##") and not line.startswith("###"):
            return parse_directive(line)
        if len(line) > 1 and line[1] != "#":
            # Comment
            return None
    return parse_record(line)


def parse_directive(line):
    """
    Parse a ``##<name> <data>`` line into a :class:`Directive`.

    Parameters
    ----------
    line : str
        The stripped directive line.

    Returns
    -------
    directive : Directive
        The parsed directive.
        If the line has no data part, the data is an empty string.
    """
    match = _DIRECTIVE_PATTERN.match(line)
    if match is None:
        raise MalformedRecordError(f"'{line}' is not a valid directive")
    name, data = match.groups()
    if data is None:
        warnings.warn(f"Directive '{name}' has no data")
        data = ""
    return Directive(name, data)


def parse_record(line):
    """
    Parse a line containing the 9 tab separated columns of a GFF3 entry
    into a :class:`FeatureRecord`.

    Only the *attributes* column is parsed, all other columns are kept
    as text.

    Parameters
    ----------
    line : str
        The stripped entry line.

    Returns
    -------
    record : FeatureRecord
        The parsed entry.

    Raises
    ------
    MalformedRecordError
        If the line has not exactly 9 columns or the attributes are
        malformed.
    """
    # Columns are tab separated
    s = line.split("\t")
    if len(s) != 9:
        raise MalformedRecordError(f"Expected 9 columns, but got {len(s)}")
    seqid, source, type, start, end, score, strand, phase, attrib = s
    return FeatureRecord(
        seqid, source, type, start, end, score, strand, phase,
        decode_attributes(attrib)
    )
