# This source code is part of the gffstream package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "gffstream"
__author__ = "The gffstream contributors"
__all__ = [
    "InvalidFileError",
    "MalformedRecordError",
    "NumericFormatError",
    "MissingInputError",
    "UnresolvedReferenceError",
    "write_records",
]

import io
from os import PathLike


class InvalidFileError(Exception):
    """
    Indicates that the file is not suitable for the requested action,
    either because the file does not contain the required data or
    because the file is malformed.
    """

    pass


class MalformedRecordError(InvalidFileError):
    """
    Indicates that a feature line does not consist of 9 tab separated
    columns or that its attribute column is malformed.
    """

    pass


class NumericFormatError(InvalidFileError, ValueError):
    """
    Indicates that a numeric column (*start*, *end*, *score* or
    *phase*) contains text that cannot be converted into a number.
    """

    pass


class MissingInputError(InvalidFileError, OSError):
    """
    Indicates that the given file path cannot be opened.
    """

    pass


class UnresolvedReferenceError(InvalidFileError):
    """
    Indicates that sequence data was requested before the embedded
    ``##FASTA`` section of a GFF3 file was reached, or from a file that
    has no such section.
    """

    pass


def write_records(file, elements):
    """
    Write the text representation of each stream element into the
    specified `file`.

    In contrast to collecting the lines first, each element is directly
    written to the file.
    Hence, this function may save a large amount of memory if a large
    file should be written, especially if the `elements` are provided
    as generator.

    Parameters
    ----------
    file : file-like object or str
        The file to be written to.
        Alternatively a file path can be supplied.
    elements : iterable object of FeatureRecord or Directive
        The elements to be written.
    """
    # Avoid circular import
    from .records import to_text

    if is_open_compatible(file):
        with open(file, "w") as f:
            for element in elements:
                f.write(to_text(element) + "\n")
    else:
        if not is_text(file):
            raise TypeError("A file opened in 'text' mode is required")
        for element in elements:
            file.write(to_text(element) + "\n")


def open_lines(file, encoding="utf-8"):
    """
    Open a line source.

    Parameters
    ----------
    file : file-like object or str or iterable object of str
        A file path, a file opened in text mode or any iterable of
        lines.
    encoding : str, optional
        The encoding used, if `file` is a path.

    Returns
    -------
    lines : iterator of str
        An iterator over the lines of the source.
    handle : file-like object or None
        The file handle opened by this function.
        The caller is responsible for closing it.
        ``None`` if `file` was not a path.
    """
    # File name
    if is_open_compatible(file):
        try:
            handle = open(file, "r", encoding=encoding)
        except OSError as e:
            raise MissingInputError(
                f"Cannot open GFF3 input '{file}'"
            ) from e
        return iter(handle), handle
    # File object
    if is_binary(file):
        raise TypeError("A file opened in 'text' mode is required")
    # Any other iterable of lines
    return iter(file), None


def is_binary(file):
    if isinstance(file, io.BufferedIOBase):
        return True
    # for file wrappers, e.g. 'TemporaryFile'
    return hasattr(file, "file") and isinstance(file.file, io.BufferedIOBase)


def is_text(file):
    if isinstance(file, io.TextIOBase):
        return True
    # for file wrappers, e.g. 'TemporaryFile'
    return hasattr(file, "file") and isinstance(file.file, io.TextIOBase)


def is_open_compatible(file):
    return isinstance(file, (str, bytes, PathLike))
