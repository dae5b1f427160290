from __future__ import annotations
import logging
from typing import Awaitable, Callable, Iterable
from ..core.store import ElementStore
from .layout import AssetRequest


logger = logging.getLogger(__name__)

AssetGenerator = Callable[[str], Awaitable[str]]


async def fill_assets(
    store: ElementStore,
    requests: Iterable[AssetRequest],
    generate: AssetGenerator,
) -> int:
    """
    Generates the content of placed elements one after the other.

    A failed request is logged and skipped; it never affects the other
    requests or the elements that were already placed. Elements deleted
    while their asset was generating are left alone.

    Returns:
        The number of elements that received content.
    """
    filled = 0
    for request in requests:
        try:
            content = await generate(request.prompt)
        except Exception:
            logger.exception(
                f"Asset generation failed for {request.element_id}"
            )
            continue

        if request.element_id not in store:
            logger.debug(f"Element {request.element_id} is gone, skipping")
            continue
        store.patch_element(request.element_id, content=content)
        filled += 1

    logger.info(f"Filled {filled} assets")
    return filled
