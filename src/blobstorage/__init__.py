# blobstorage - Content-addressed blob storage adapters over nostr
from .address import (
    BlobKind,
    BlobAddress,
    PublicBlob,
    PrivateBlob,
    make_blob,
    blob_name
)
from .errors import (
    BlobStorageError,
    CoreError,
    SizeMismatch,
    NetworkFailure,
    DataNotFound,
    DryRunUnsupported,
    Unexpected
)
from .client import BlobClient, NostrBlobClient
from .memory import MemoryBlobClient
from .storage import Storage, BlobStorage, BlobStorageDryRun, wait_for_blob
from .chunker import FileChunker, datamap_hash
from .constants import XOR_NAME_LEN, CHUNK_SIZE, BLOB_KIND

__version__ = "0.1.0"
__all__ = [
    "BlobKind",
    "BlobAddress",
    "PublicBlob",
    "PrivateBlob",
    "make_blob",
    "blob_name",
    "BlobStorageError",
    "CoreError",
    "SizeMismatch",
    "NetworkFailure",
    "DataNotFound",
    "DryRunUnsupported",
    "Unexpected",
    "BlobClient",
    "NostrBlobClient",
    "MemoryBlobClient",
    "Storage",
    "BlobStorage",
    "BlobStorageDryRun",
    "wait_for_blob",
    "FileChunker",
    "datamap_hash",
    "XOR_NAME_LEN",
    "CHUNK_SIZE",
    "BLOB_KIND"
]
