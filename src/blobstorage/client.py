import base64
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import List

from loguru import logger
from nostr_sdk import (
    Keys, Client, NostrSigner, Filter, Kind, EventBuilder, Tag, PublicKey,
    SingleLetterTag, Alphabet
)

from .address import (
    Blob, BlobAddress, BlobKind, PublicBlob, PrivateBlob, owner_bytes
)
from .constants import BLOB_KIND, NAME_TAG, VARIANT_TAG, OWNER_TAG, FETCH_TIMEOUT
from .errors import DataNotFound, NetworkFailure


class BlobClient(ABC):
    """Network operations a storage adapter relies on"""

    @abstractmethod
    async def get_blob(self, address: BlobAddress) -> Blob:
        ...

    @abstractmethod
    async def store_blob(self, blob: Blob) -> BlobAddress:
        ...

    @abstractmethod
    async def public_key(self) -> PublicKey:
        ...


class NostrBlobClient(BlobClient):
    """Stores each blob as one nostr event tagged with its name.

    Reads recompute the address from the event content, so relays can't
    serve forged data under someone else's name.
    """

    def __init__(self, private_key_hex: str, relays: List[str]):
        self.keys = Keys.parse(private_key_hex)
        self.relays = relays
        self.client = None

    async def start(self):
        """Initialize client connection"""
        self.client = Client(NostrSigner.keys(self.keys))
        for relay in self.relays:
            await self.client.add_relay(relay)
        await self.client.connect()
        logger.info("Client connected to relays")

    async def stop(self):
        if self.client is not None:
            await self.client.disconnect()
            self.client = None

    async def public_key(self) -> PublicKey:
        return self.keys.public_key()

    async def store_blob(self, blob: Blob) -> BlobAddress:
        try:
            await self._publish(
                base64.b64encode(blob.value).decode(), self._blob_tags(blob)
            )
        except Exception as e:
            raise NetworkFailure(f"Failed to store blob {blob.address}: {e}") from e

        logger.info(f"Stored blob {blob.address} ({len(blob.value)} bytes)")
        return blob.address

    async def get_blob(self, address: BlobAddress) -> Blob:
        try:
            events = await self._fetch_events(address)
        except Exception as e:
            raise NetworkFailure(f"Failed to query blob {address}: {e}") from e

        for event in events:
            try:
                blob = self._parse_event(event, address.kind)
            except Exception as e:
                logger.debug(f"Skipping malformed blob event: {e}")
                continue

            if blob.address == address:
                return blob
            logger.warning(f"Event content doesn't match blob {address}")

        raise DataNotFound(f"Blob {address} not found")

    async def _publish(self, content: str, tags: List[Tag]):
        if self.client is None:
            raise NetworkFailure("Client not started")
        await self.client.send_event_builder(self._event_builder(content, tags))

    async def _fetch_events(self, address: BlobAddress) -> list:
        if self.client is None:
            raise NetworkFailure("Client not started")
        events = await self.client.fetch_events(
            self._blob_filter(address), timedelta(seconds=FETCH_TIMEOUT)
        )
        return events.to_vec()

    @staticmethod
    def _blob_tags(blob: Blob) -> List[Tag]:
        tags = [
            Tag.parse([NAME_TAG, blob.address.hex]),
            Tag.parse([VARIANT_TAG, blob.kind.value]),
        ]
        if blob.owner is not None:
            tags.append(Tag.parse([OWNER_TAG, owner_bytes(blob.owner).hex()]))
        return tags

    @staticmethod
    def _event_builder(content: str, tags: List[Tag]) -> EventBuilder:
        return EventBuilder(Kind(BLOB_KIND), content).tags(tags)

    @staticmethod
    def _blob_filter(address: BlobAddress) -> Filter:
        return Filter().kinds([Kind(BLOB_KIND)]).custom_tag(
            SingleLetterTag.lowercase(Alphabet.X), address.hex
        )

    @staticmethod
    def _parse_event(event, kind: BlobKind) -> Blob:
        tags = {}
        for tag in event.tags().to_vec():
            tag_vec = tag.as_vec()
            if len(tag_vec) >= 2:
                tags[tag_vec[0]] = tag_vec[1]

        value = base64.b64decode(event.content())
        if kind is BlobKind.PUBLIC:
            return PublicBlob(value)
        return PrivateBlob(value, PublicKey.parse(tags[OWNER_TAG]))
