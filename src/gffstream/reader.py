# This source code is part of the gffstream package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "gffstream"
__author__ = "The gffstream contributors"
__all__ = ["GFFReader", "read_records"]

import logging
from .file import InvalidFileError, UnresolvedReferenceError, open_lines
from .parser import parse_line


logger = logging.getLogger(__name__)

FASTA_DIRECTIVE = "##FASTA"


class GFFReader:
    """
    A forward-only reader for files in *Generic Feature Format 3*
    (`GFF3 <https://github.com/The-Sequence-Ontology/Specifications/blob/master/gff3.md>`_).

    The entries and directives of the file are obtained lazily via
    :meth:`records()`.
    Comments and blank lines are skipped.
    The annotation part of the file ends at the ``##FASTA`` directive or
    at the first FASTA header line (``>...``).
    The sequence data following it is available via
    :meth:`fasta_lines()`, :meth:`get_sequences()` and
    :meth:`get_sequence()` after :meth:`records()` has been consumed.

    The reader tracks, whether the resolution directive (``###``) has
    been read: All forward references of the entries read so far are
    resolved from this point on.

    If a file path is given, the reader opens the file itself and closes
    it in :meth:`close()`.
    Hence, it should be used as context manager.
    A file object given by the caller is not closed.

    Parameters
    ----------
    file : file-like object or str or iterable object of str
        The file to be read.
        Alternatively a file path or any iterable of lines can be
        supplied.
    encoding : str, optional
        The encoding of the file, if a file path is given.

    Attributes
    ----------
    resolved : bool
        True, if the resolution directive has been read.

    Examples
    --------

    >>> lines = [
    ...     "##gff-version 3",
    ...     "chr1\\tWormBase\\tgene\\t25\\t387\\t.\\t-\\t.\\tID=gene1",
    ...     "###",
    ...     "##FASTA",
    ...     ">chr1",
    ...     "ACGT",
    ... ]
    >>> with GFFReader(lines) as reader:
    ...     for record in reader.records():
    ...         print(repr(record))
    ...     print(reader.resolved)
    ...     print(reader.get_sequence("chr1"))
    Directive('gff-version', '3')
    FeatureRecord('chr1', 'WormBase', 'gene', '25', '387', '.', '-', '.', {'id': ['gene1']})
    Directive('#', None)
    True
    ACGT
    """

    def __init__(self, file, encoding="utf-8"):
        self._lines, self._handle = open_lines(file, encoding)
        self._resolved = False
        self._started = False
        # None -> annotation part is not finished yet
        # False -> file ended without sequence data
        # True -> '_lines' is at the beginning of the sequence data
        self._has_fasta = None
        # The FASTA header line that terminated the annotation part
        self._first_fasta_line = None
        self._fasta_lines = None
        self._sequences = None
        if self._handle is not None:
            logger.debug("Opened GFF3 file '%s'", file)

    @property
    def resolved(self):
        return self._resolved

    def records(self):
        """
        Iterate over the entries and directives of the annotation part
        of the file.

        The returned generator performs a single pass through the file
        and can only be created once per reader.

        Yields
        ------
        element : FeatureRecord or Directive
            The next element.

        Raises
        ------
        MalformedRecordError
            If a line is malformed.
            The error is raised when the respective element is
            requested.
        """
        if self._started:
            raise RuntimeError(
                "The records of a GFF3 file can only be read once"
            )
        self._started = True
        return self._iter_records()

    def _iter_records(self):
        for line in self._lines:
            stripped = line.strip()
            if stripped == FASTA_DIRECTIVE:
                self._enter_fasta()
                return
            if stripped.startswith(">"):
                self._enter_fasta(stripped)
                return
            element = parse_line(line)
            if element is None:
                continue
            if element.is_resolved() and not self._resolved:
                self._resolved = True
                logger.debug("All forward references are resolved")
            yield element
        self._has_fasta = False

    def _enter_fasta(self, first_line=None):
        logger.debug("Reached sequence data, annotation part is finished")
        self._has_fasta = True
        self._first_fasta_line = first_line

    def fasta_lines(self):
        """
        Iterate over the lines of the sequence data following the
        annotation part.

        The remaining file is read into memory on the first access to
        the sequence data.
        Hence, this method can be called repeatedly and may be combined
        with :meth:`get_sequences()`.

        Returns
        -------
        lines : iterator of str
            The lines, without trailing whitespace.

        Raises
        ------
        UnresolvedReferenceError
            If the annotation part has not been read completely, or if
            the file contains no sequence data.
        """
        return iter(self._read_fasta_lines())

    def _read_fasta_lines(self):
        self._check_fasta()
        if self._fasta_lines is None:
            fasta_lines = []
            if self._first_fasta_line is not None:
                fasta_lines.append(self._first_fasta_line)
            fasta_lines += [line.rstrip() for line in self._lines]
            self._fasta_lines = fasta_lines
        return self._fasta_lines

    def get_sequences(self):
        """
        Get the sequences following the annotation part.

        Returns
        -------
        sequences : dict
            Maps the accession, i.e. the header text up to the first
            whitespace, to the sequence string.

        Raises
        ------
        UnresolvedReferenceError
            If the annotation part has not been read completely, or if
            the file contains no sequence data.
        InvalidFileError
            If the sequence data does not start with a header line.
        """
        if self._sequences is not None:
            return dict(self._sequences)
        sequences = {}
        accession = None
        seq_strings = None
        for line in self._read_fasta_lines():
            if len(line) == 0:
                continue
            if line.startswith(">"):
                if accession is not None:
                    sequences[accession] = "".join(seq_strings)
                header = line[1:].split()
                accession = header[0] if len(header) > 0 else ""
                seq_strings = []
            elif accession is None:
                raise InvalidFileError(
                    "Sequence data must start with a header line"
                )
            else:
                seq_strings.append(line)
        if accession is not None:
            sequences[accession] = "".join(seq_strings)
        logger.debug("Read %d embedded sequences", len(sequences))
        self._sequences = sequences
        return dict(sequences)

    def get_sequence(self, accession):
        """
        Get a sequence following the annotation part.

        Parameters
        ----------
        accession : str
            The accession of the sequence, i.e. the header text up to
            the first whitespace.

        Returns
        -------
        sequence : str
            The sequence string.

        Raises
        ------
        UnresolvedReferenceError
            If the annotation part has not been read completely, or if
            the file contains no sequence data.
        KeyError
            If there is no sequence with the given accession.
        """
        sequences = self.get_sequences()
        if accession not in sequences:
            raise KeyError(f"No sequence with accession '{accession}'")
        return sequences[accession]

    def _check_fasta(self):
        if self._has_fasta is None:
            raise UnresolvedReferenceError(
                "The sequence data is not available before all records "
                "have been read"
            )
        if not self._has_fasta:
            raise UnresolvedReferenceError(
                "The GFF3 file contains no sequence data"
            )

    def close(self):
        """
        Close the file, if it was opened by this reader.
        """
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def read_records(file, encoding="utf-8"):
    """
    Iterate over the entries and directives of a GFF3 file.

    The file is closed when the iteration is finished or when the
    generator is closed before.

    Parameters
    ----------
    file : file-like object or str or iterable object of str
        The file to be read.
        Alternatively a file path or any iterable of lines can be
        supplied.
    encoding : str, optional
        The encoding of the file, if a file path is given.

    Yields
    ------
    element : FeatureRecord or Directive
        The next element.
    """
    with GFFReader(file, encoding) as reader:
        yield from reader.records()
