"""Column metadata (index -> name) resolution."""

from __future__ import annotations

import logging

from .errors import NoCustomHeaderError, NoHeaderError
from .options import Options
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


def resolve_header(tokenizer: Tokenizer, options: Options) -> dict[int, str]:
    """Establish the column metadata for a Binder.

    Without an explicit `options.header`, exactly one record is read from
    `tokenizer` and each value becomes the name of its column; any tokenizer
    error propagates, `EndOfInput` included. With an explicit header, it is
    used verbatim and nothing is read.

    Raises:
        NoHeaderError: the header record is empty.
        NoCustomHeaderError: the explicit header mapping is empty.
    """
    if options.header is None:
        record = tokenizer.next_record()
        meta = {i: col for i, col in enumerate(record)}
        if not meta:
            raise NoHeaderError()
        logger.debug("Header read from stream: %d columns", len(meta))
        return meta

    meta = dict(options.header)
    if not meta:
        raise NoCustomHeaderError()
    logger.debug("Using explicit header: %d columns", len(meta))
    return meta
