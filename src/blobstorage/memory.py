from typing import Dict, Optional

from loguru import logger
from nostr_sdk import Keys, PublicKey

from .address import Blob, BlobAddress
from .client import BlobClient
from .errors import DataNotFound


class MemoryBlobClient(BlobClient):
    """In-process blob client backed by a dict.

    `visible_after` makes each freshly stored blob answer not-found for that
    many reads, the way a replicated store lags behind a write.
    """

    def __init__(self, keys: Optional[Keys] = None, visible_after: int = 0):
        self.keys = keys or Keys.generate()
        self.visible_after = visible_after
        self.blobs: Dict[BlobAddress, Blob] = {}
        self._pending: Dict[BlobAddress, int] = {}

    async def public_key(self) -> PublicKey:
        return self.keys.public_key()

    async def store_blob(self, blob: Blob) -> BlobAddress:
        address = blob.address
        if address not in self.blobs:
            self.blobs[address] = blob
            self._pending[address] = self.visible_after
        logger.debug(f"Stored blob {address} in memory")
        return address

    async def get_blob(self, address: BlobAddress) -> Blob:
        if self._pending.get(address, 0) > 0:
            self._pending[address] -= 1
            raise DataNotFound(f"Blob {address} not found")
        try:
            return self.blobs[address]
        except KeyError:
            raise DataNotFound(f"Blob {address} not found") from None
