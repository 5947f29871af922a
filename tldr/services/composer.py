from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator

from tldr.core.constants import METADATA_DELIMITER
from tldr.schemas.summaries import ArticleMetadata
from tldr.services.summarizer import SummarizationError

logger = logging.getLogger(__name__)


def encode_metadata_segment(metadata: ArticleMetadata) -> bytes:
    payload = json.dumps({"metadata": metadata.to_payload()}, ensure_ascii=False)
    return f"{payload}{METADATA_DELIMITER}".encode()


async def compose_summary_stream(
    fragments: AsyncIterator[str],
    metadata: ArticleMetadata | None = None,
) -> AsyncIterator[bytes]:
    """
    Merge the metadata record and the summary fragments into one byte stream.

    The body is `{"metadata": {...}}\\n---\\n` followed by the summary text, or
    just the summary text when there is no metadata. Readers split on the
    first delimiter. Each fragment is forwarded as its own chunk.
    """
    if metadata is not None:
        yield encode_metadata_segment(metadata)

    forwarded = 0
    try:
        async for fragment in fragments:
            forwarded += 1
            yield fragment.encode()
    except Exception as exc:
        logger.error("Summary stream aborted after %d fragments: %s", forwarded, exc)
        raise SummarizationError("Summary stream aborted") from exc

    logger.info("Summary stream finished", extra={"fragments": forwarded})
