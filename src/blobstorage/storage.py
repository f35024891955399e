import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from loguru import logger

from .address import Blob, BlobAddress, make_blob
from .client import BlobClient
from .constants import XOR_NAME_LEN
from .errors import (
    BlobStorageError, DataNotFound, DryRunUnsupported, SizeMismatch, Unexpected
)


class Storage(ABC):
    @abstractmethod
    async def get(self, name: bytes) -> bytes:
        ...

    @abstractmethod
    async def put(self, name: Optional[bytes], data: bytes) -> None:
        ...

    @abstractmethod
    async def generate_address(self, data: bytes) -> bytes:
        ...


def check_name(name: bytes) -> None:
    if len(name) != XOR_NAME_LEN:
        raise BlobStorageError(SizeMismatch(
            f"Requested `name` is incorrect size: expected {XOR_NAME_LEN} bytes, "
            f"got {len(name)}"
        ))


class _BlobAddressing:
    def __init__(self, client: BlobClient, published: bool):
        self._client = client
        self._published = published

    @property
    def client(self) -> BlobClient:
        return self._client

    @property
    def published(self) -> bool:
        return self._published

    async def _make_blob(self, data: bytes) -> Blob:
        owner = None
        if not self._published:
            try:
                owner = await self._client.public_key()
            except BlobStorageError:
                raise
            except Exception as e:
                raise BlobStorageError.wrap(e) from e
        return make_blob(data, self._published, owner)

    async def generate_address(self, data: bytes) -> bytes:
        """Name `data` exactly as `put` would store it"""
        blob = await self._make_blob(data)
        return blob.name


class BlobStorage(_BlobAddressing, Storage):
    """Reads and writes blobs on the network for the chunking algorithm."""

    async def get(self, name: bytes) -> bytes:
        logger.trace("Self encrypt invoked GetBlob.")
        check_name(name)

        address = BlobAddress.from_name(name, self._published)
        try:
            blob = await self._client.get_blob(address)
        except BlobStorageError:
            raise
        except Exception as e:
            raise BlobStorageError.wrap(e) from e
        return blob.value

    async def put(self, name: Optional[bytes], data: bytes) -> None:
        """Store `data` under the address derived from its content.

        `name` does not take part in addressing. A caller may pass a
        provisional name; the stored address always comes from `data` (and
        the owner key for private blobs), so a differing name is only logged.
        """
        logger.trace("Self encrypt invoked PutBlob.")
        try:
            blob = await self._make_blob(data)
            if name and bytes(name) != blob.name:
                logger.debug(
                    f"Ignoring passed name {bytes(name).hex()}, storing as {blob.address}"
                )
            stored = await self._client.store_blob(blob)
            if stored != blob.address:
                raise BlobStorageError(Unexpected(
                    f"Client stored {stored}, expected {blob.address}"
                ))
        except BlobStorageError:
            raise
        except Exception as e:
            raise BlobStorageError.wrap(e) from e


class BlobStorageDryRun(_BlobAddressing, Storage):
    """Storage that only computes addresses; nothing reaches the network."""

    async def get(self, name: bytes) -> bytes:
        logger.trace("Self encrypt invoked GetBlob dry run.")
        check_name(name)
        raise BlobStorageError(DryRunUnsupported(
            "Cannot get from storage since it's a dry run."
        ))

    async def put(self, name: Optional[bytes], data: bytes) -> None:
        # Succeed so the caller can still build its chunk addresses and datamap.
        logger.trace("Self encrypt invoked PutBlob dry run.")


async def wait_for_blob(storage: Storage, name: bytes,
                        interval: float = 0.2, timeout: float = 30) -> bytes:
    """Poll `storage.get` until the blob stops being reported as missing.

    Any failure other than not-found is raised straight away. Raises
    ``asyncio.TimeoutError`` if the blob doesn't show up within `timeout`.
    """
    async def _poll():
        while True:
            try:
                return await storage.get(name)
            except BlobStorageError as e:
                if not isinstance(e.error, DataNotFound):
                    raise
            await asyncio.sleep(interval)

    return await asyncio.wait_for(_poll(), timeout=timeout)
