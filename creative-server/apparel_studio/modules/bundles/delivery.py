"""Targets a finished archive can be handed to."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, TypeVar

logger = logging.getLogger(__name__)

DeliveredT_co = TypeVar("DeliveredT_co", covariant=True)


class ArchiveDelivery(Protocol[DeliveredT_co]):
    """Receives the serialised archive bytes together with their download filename."""

    async def deliver(self, data: bytes, filename: str) -> DeliveredT_co:
        ...


@dataclass(frozen=True, slots=True)
class DeliveredArchive:
    filename: str
    data: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class InMemoryArchiveDelivery:
    """Keeps the archive in memory and returns it."""

    def __init__(self) -> None:
        self.last: Optional[DeliveredArchive] = None

    async def deliver(self, data: bytes, filename: str) -> DeliveredArchive:
        self.last = DeliveredArchive(filename=filename, data=data)
        return self.last


class FileArchiveDelivery:
    """Writes the archive into ``directory`` and returns the final path.

    The file is written to a ``.part`` sibling first and then moved into place.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    async def deliver(self, data: bytes, filename: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        target_path = self.directory / Path(filename).name
        temp_path = target_path.with_suffix(target_path.suffix + ".part")
        try:
            temp_path.write_bytes(data)
            temp_path.replace(target_path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
        logger.info("Archive written to %s (%d bytes)", target_path, len(data))
        return target_path
