import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from nostr_sdk import PublicKey

from .constants import XOR_NAME_LEN

Owner = Union[PublicKey, bytes]


class BlobKind(Enum):
    PUBLIC = 'public'
    PRIVATE = 'private'

    @classmethod
    def from_published(cls, published: bool) -> 'BlobKind':
        return cls.PUBLIC if published else cls.PRIVATE


@dataclass(frozen=True)
class BlobAddress:
    kind: BlobKind
    name: bytes

    def __post_init__(self):
        if len(self.name) != XOR_NAME_LEN:
            raise ValueError(
                f"Blob name must be {XOR_NAME_LEN} bytes, got {len(self.name)}"
            )

    @classmethod
    def from_name(cls, name: bytes, published: bool) -> 'BlobAddress':
        return cls(BlobKind.from_published(published), bytes(name))

    @property
    def published(self) -> bool:
        return self.kind is BlobKind.PUBLIC

    @property
    def hex(self) -> str:
        return self.name.hex()

    def __str__(self):
        return f"{self.kind.value}:{self.hex}"


def owner_bytes(owner: Owner) -> bytes:
    """Return the raw 32 byte form of an owner key"""
    if isinstance(owner, (bytes, bytearray)):
        return bytes(owner)
    return bytes.fromhex(owner.to_hex())


class _Blob:
    kind: BlobKind
    value: bytes
    name: bytes

    @property
    def address(self) -> BlobAddress:
        return BlobAddress(self.kind, self.name)

    def __repr__(self):
        return f"<{type(self).__name__} {self.address} ({len(self.value)} bytes)>"


class PublicBlob(_Blob):
    kind = BlobKind.PUBLIC

    def __init__(self, value: bytes):
        self.value = bytes(value)
        self.name = hashlib.sha3_256(self.value).digest()

    @property
    def owner(self) -> None:
        return None


class PrivateBlob(_Blob):
    kind = BlobKind.PRIVATE

    def __init__(self, value: bytes, owner: Owner):
        self.value = bytes(value)
        self._owner = owner
        value_hash = hashlib.sha3_256(self.value).digest()
        self.name = hashlib.sha3_256(value_hash + owner_bytes(owner)).digest()

    @property
    def owner(self) -> Owner:
        return self._owner


Blob = Union[PublicBlob, PrivateBlob]


def make_blob(data: bytes, published: bool, owner: Optional[Owner] = None) -> Blob:
    """Build the blob variant selected by `published`.

    Private blobs require `owner`.
    """
    if published:
        return PublicBlob(data)
    if owner is None:
        raise ValueError("Private blobs need an owner key")
    return PrivateBlob(data, owner)


def blob_name(data: bytes, published: bool, owner: Optional[Owner] = None) -> bytes:
    return make_blob(data, published, owner).name
