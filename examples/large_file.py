#!/usr/bin/env python3
"""
Store a large random blob on nostr relays and poll until it can be read back
"""
import asyncio
import os
import sys
from nostr_sdk import Keys
from loguru import logger
from blobstorage import (
    BlobStorage, BlobStorageDryRun, BlobStorageError, DataNotFound, NostrBlobClient, wait_for_blob
)
from blobstorage.log import init_logging

init_logging("DEBUG")

async def main(public: bool = True):
    keys = Keys.generate()
    relays = ["wss://relay.damus.io", "wss://nos.lol"]

    client = NostrBlobClient(keys.secret_key().to_hex(), relays)
    await client.start()

    raw_data = os.urandom(256 * 1024)
    storage = BlobStorage(client, published=public)

    try:
        name = await storage.generate_address(raw_data)
        print(f"Address before storing: {name.hex()}")

        # Nothing is stored at the generated address yet
        try:
            await storage.get(name)
            raise RuntimeError("Blob unexpectedly retrieved before it was stored")
        except BlobStorageError as e:
            if not isinstance(e.error, DataNotFound):
                raise

        # A dry run names the content exactly as the live store will
        dry_name = await BlobStorageDryRun(client, published=public).generate_address(raw_data)
        assert dry_name == name

        await storage.put(None, raw_data)

        # Relays may lag behind the write
        fetched = await wait_for_blob(storage, name, interval=0.2, timeout=60)
        assert fetched == raw_data
        print("Blob retrieved and verified")
    except Exception as e:
        logger.error(f"Large file example failed: {e}")
        sys.exit(1)
    finally:
        await client.stop()

if __name__ == "__main__":
    asyncio.run(main())
