# This source code is part of the gffstream package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This is the top-level package of *gffstream*.

It reads files in *Generic Feature Format 3* (GFF3) as a lazy stream of
entries (:class:`FeatureRecord`) and directives (:class:`Directive`).
Furthermore, it provides functions to compute the uncovered parts of a
feature (e.g. introns) and to group the stream into blocks, each
containing one gene and its child features.

.. note: The stream is a single forward pass through the file.
   The entries are not indexed, hence it is not possible to access
   the parent or child of a feature directly.
   However, the ``ID`` and ``Parent`` attributes are available in
   :attr:`FeatureRecord.attributes`.
"""

__version__ = "0.1.0"
__name__ = "gffstream"
__author__ = "The gffstream contributors"

from .file import *
from .attributes import *
from .records import *
from .parser import *
from .reader import *
from .intervals import *
from .blocks import *
