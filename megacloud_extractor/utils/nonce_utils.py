"""Recovery of the MegaCloud request-signing nonce from embed page HTML.

The player page carries the ``_k`` value either as one 48 character literal
or split into 16 character quoted chunks inside inline scripts. Each strategy
below looks for one of these encodings and returns ``None`` when it does not
apply; :func:`resolve_nonce` tries them in order and stops at the first hit.
"""

import logging
import re
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

NONCE_48_PATTERN = re.compile(r"\b[a-zA-Z0-9]{48}\b", re.ASCII)
NONCE_16_CHUNK_PATTERN = re.compile(r'"([a-zA-Z0-9]{16})"')

NonceStrategy = Callable[[str], Optional[str]]


def single_token_nonce(html: str) -> Optional[str]:
    """Return the first standalone 48 character alphanumeric run."""
    match = NONCE_48_PATTERN.search(html)
    if match:
        return match.group(0)
    return None


def chunked_token_nonce(html: str) -> Optional[str]:
    """Join every quoted 16 character chunk, in document order."""
    parts = NONCE_16_CHUNK_PATTERN.findall(html)
    if not parts:
        return None
    return "".join(parts)


NONCE_STRATEGIES: Tuple[NonceStrategy, ...] = (
    single_token_nonce,
    chunked_token_nonce,
)


def resolve_nonce(html: str, strategies: Tuple[NonceStrategy, ...] = NONCE_STRATEGIES) -> Optional[str]:
    """
    Derive the nonce from raw embed HTML.

    Args:
        html (str): The embed page body.
        strategies: Strategies to try, in priority order.

    Returns:
        str | None: The nonce from the first strategy that finds one, or None.
    """
    for strategy in strategies:
        nonce = strategy(html)
        if nonce:
            logger.debug("Nonce resolved by %s", strategy.__name__)
            return nonce
    return None
