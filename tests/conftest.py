import pytest
from nostr_sdk import Keys

from blobstorage.memory import MemoryBlobClient


class RecordingClient(MemoryBlobClient):
    """Memory client that records every network call made through it"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    async def public_key(self):
        self.calls.append('public_key')
        return await super().public_key()

    async def store_blob(self, blob):
        self.calls.append('store_blob')
        return await super().store_blob(blob)

    async def get_blob(self, address):
        self.calls.append('get_blob')
        return await super().get_blob(address)


class FailingClient(MemoryBlobClient):
    async def store_blob(self, blob):
        raise ConnectionError("relay unreachable")

    async def get_blob(self, address):
        raise ConnectionError("relay unreachable")


@pytest.fixture
def client():
    return RecordingClient()


@pytest.fixture
def other_client():
    return RecordingClient(Keys.generate())


class KeylessClient(MemoryBlobClient):
    async def public_key(self):
        raise ConnectionError("key lookup failed")
