"""Concurrent fetch-and-zip of every asset attached to an order.

Each remote asset gets its archive entry reserved up front (``plan_assets``),
all downloads run concurrently, and the archive is serialised only after every
download has settled. A failed download is logged and leaves its entry out;
it never cancels the others.
"""

from __future__ import annotations

import asyncio
import io
import logging
import zipfile
from contextlib import nullcontext
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, TypeVar

import httpx

from apparel_studio.core.config import get_settings

from .delivery import ArchiveDelivery
from .exceptions import BundleError
from .models import (
    ADMIN_FINALS,
    BRAND_IDENTITY,
    BUNDLE_FOLDERS,
    CLIENT_BRIEFS,
    LOGO_ENTRY_NAME,
    AssetSlot,
    FolderNames,
    archive_filename,
    bundle_root,
    sanitize_entry_name,
    url_basename,
)

if TYPE_CHECKING:
    from apparel_studio.modules.brands import Brand
    from apparel_studio.modules.orders import Order

logger = logging.getLogger(__name__)

T = TypeVar("T")


def plan_assets(order: "Order", brand: Optional["Brand"]) -> list[AssetSlot]:
    """Reserve one archive entry per remote asset of ``order`` and ``brand``."""
    names = FolderNames()
    slots: list[AssetSlot] = []

    for index, attachment in enumerate(order.attachments):
        folder = ADMIN_FINALS if attachment.is_result() else CLIENT_BRIEFS
        name = sanitize_entry_name(attachment.name) or f"file_{index}"
        slots.append(AssetSlot(folder, names.reserve(folder, name), attachment.url))

    if brand is not None:
        # the logo owns the literal name even when a reference asset is also called "logo"
        logo_slot = None
        if brand.logo_url:
            logo_slot = AssetSlot(BRAND_IDENTITY, names.reserve(BRAND_IDENTITY, LOGO_ENTRY_NAME), brand.logo_url)
        for index, url in enumerate(brand.reference_assets):
            name = url_basename(url) or f"ref_{index}"
            slots.append(AssetSlot(BRAND_IDENTITY, names.reserve(BRAND_IDENTITY, name), url))
        if logo_slot is not None:
            slots.append(logo_slot)

    return slots


def write_archive(root: str, entries: Sequence[tuple[AssetSlot, bytes]]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for folder in BUNDLE_FOLDERS:
            zf.writestr(f"{root}/{folder}/", b"")
        for slot, content in entries:
            zf.writestr(slot.entry_path(root), content)
    return buffer.getvalue()


@dataclass(slots=True)
class AssetBundler:
    """Builds order bundles.

    ``fetch_timeout`` is a deadline on each complete download (``None`` waits forever) and
    ``max_concurrency`` caps simultaneous downloads (``None`` is unbounded).
    ``transport`` swaps the network layer, e.g. ``httpx.MockTransport`` in tests.
    """

    fetch_timeout: Optional[float] = 30.0
    max_concurrency: Optional[int] = None
    follow_redirects: bool = True
    transport: Optional[httpx.AsyncBaseTransport] = None

    @classmethod
    def from_settings(cls) -> "AssetBundler":
        settings = get_settings().bundle
        return cls(
            fetch_timeout=settings.fetch_timeout,
            max_concurrency=settings.max_concurrency,
            follow_redirects=settings.follow_redirects,
        )

    async def bundle(
        self,
        order: Optional["Order"],
        brand: Optional["Brand"],
        delivery: ArchiveDelivery[T],
    ) -> Optional[T]:
        """Fetch, pack and deliver the bundle for ``order``.

        Returns whatever ``delivery`` returns, or ``None`` when there is no
        order to bundle. Raises ``BundleError`` when the archive cannot be
        serialised or delivered; ``delivery`` is not called in the first case.
        """
        if order is None:
            logger.debug("No order supplied, skipping bundle")
            return None

        data = await self.build_archive(order, brand)
        filename = archive_filename(order.title)
        try:
            return await delivery.deliver(data, filename)
        except Exception as exc:
            logger.error("Delivering bundle %s failed: %s", filename, exc)
            raise BundleError("Bundling failed") from exc

    async def build_archive(self, order: "Order", brand: Optional["Brand"]) -> bytes:
        slots = plan_assets(order, brand)
        contents = await self._fetch_all(slots)
        entries = [(slot, content) for slot, content in zip(slots, contents) if content is not None]
        logger.info(
            "Bundling order %s: %d of %d assets fetched",
            order.id,
            len(entries),
            len(slots),
        )

        try:
            return await asyncio.to_thread(write_archive, bundle_root(order.title), entries)
        except Exception as exc:
            logger.error("Serialising bundle for order %s failed: %s", order.id, exc)
            raise BundleError("Bundling failed") from exc

    async def _fetch_all(self, slots: Sequence[AssetSlot]) -> list[Optional[bytes]]:
        if not slots:
            return []
        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.fetch_timeout),
            limits=httpx.Limits(max_connections=None, max_keepalive_connections=20),
            follow_redirects=self.follow_redirects,
            transport=self.transport,
        ) as client:
            return list(
                await asyncio.gather(*(self._fetch(client, slot, semaphore) for slot in slots))
            )

    async def _fetch(
        self,
        client: httpx.AsyncClient,
        slot: AssetSlot,
        semaphore: Optional[asyncio.Semaphore],
    ) -> Optional[bytes]:
        try:
            async with semaphore or nullcontext():
                # the deadline covers the whole download, not each read
                return await asyncio.wait_for(self._download(client, slot.url), self.fetch_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Skipping asset %s/%s (%s): no complete response within %ss",
                slot.folder,
                slot.name,
                slot.url,
                self.fetch_timeout,
            )
            return None
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Skipping asset %s/%s (%s): %s", slot.folder, slot.name, slot.url, exc)
            return None

    @staticmethod
    async def _download(client: httpx.AsyncClient, url: str) -> bytes:
        response = await client.get(url)
        response.raise_for_status()
        return response.content
