#!/usr/bin/env python3
"""
Basic usage example for blobstorage
"""
import asyncio
from nostr_sdk import Keys
from blobstorage import BlobStorage, BlobStorageDryRun, FileChunker, MemoryBlobClient, datamap_hash
from blobstorage.log import init_logging

init_logging("INFO")

async def main():
    # Generate keys (or use your own)
    keys = Keys.generate()
    print(f"Using temporary key: {keys.secret_key().to_bech32()}")

    client = MemoryBlobClient(keys)
    data = b"hello blob storage " * 5000

    # Compute the datamap without storing anything
    dry_map = await FileChunker(BlobStorageDryRun(client, published=False)).store(data)
    print(f"Dry run datamap: {datamap_hash(dry_map)} ({len(dry_map)} chunks)")

    # Store for real; the datamap matches the dry run
    chunker = FileChunker(BlobStorage(client, published=False))
    datamap = await chunker.store(data)
    print(f"Stored datamap:  {datamap_hash(datamap)}")

    restored = await chunker.retrieve(datamap)
    print(f"Round trip ok: {restored == data}")

if __name__ == "__main__":
    asyncio.run(main())
