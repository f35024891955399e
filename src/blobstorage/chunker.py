import asyncio
import hashlib
import json
from typing import List, Dict

from loguru import logger

from .constants import CHUNK_SIZE
from .storage import Storage


class FileChunker:
    def __init__(self, storage: Storage, chunk_size=CHUNK_SIZE):
        self.storage = storage
        self.chunk_size = chunk_size

    def create_chunks(self, file_data: bytes) -> List[bytes]:
        """Split file into chunk_size pieces"""
        return [
            file_data[i:i + self.chunk_size]
            for i in range(0, len(file_data), self.chunk_size)
        ]

    async def store(self, file_data: bytes) -> List[Dict]:
        """
        Name and store every chunk concurrently
        Returns the datamap, a list of chunk dictionaries with:
        - index: chunk position
        - name: hex blob name of the chunk
        - size: chunk size in bytes
        """
        async def _store_chunk(index: int, chunk: bytes) -> Dict:
            name = await self.storage.generate_address(chunk)
            await self.storage.put(name, chunk)
            return {'index': index, 'name': name.hex(), 'size': len(chunk)}

        chunks = self.create_chunks(file_data)
        datamap = await asyncio.gather(
            *(_store_chunk(i, chunk) for i, chunk in enumerate(chunks))
        )
        logger.info(f"Stored {len(datamap)} chunks ({len(file_data)} bytes)")
        return list(datamap)

    async def retrieve(self, datamap: List[Dict]) -> bytes:
        """
        Fetch all chunks of a datamap and reassemble them
        Each chunk is checked against its name before assembly
        """
        async def _fetch_chunk(chunk: Dict) -> bytes:
            data = await self.storage.get(bytes.fromhex(chunk['name']))
            actual = await self.storage.generate_address(data)
            if actual.hex() != chunk['name']:
                raise ValueError(f"Chunk {chunk['index']} hash mismatch")
            return data

        sorted_chunks = sorted(datamap, key=lambda x: x['index'])
        parts = await asyncio.gather(*(_fetch_chunk(c) for c in sorted_chunks))
        return b''.join(parts)


def datamap_hash(datamap: List[Dict]) -> str:
    """Hex digest naming a whole datamap, independent of chunk order"""
    ordered = sorted(datamap, key=lambda x: x['index'])
    encoded = json.dumps(ordered, sort_keys=True, separators=(',', ':'))
    return hashlib.sha256(encoded.encode()).hexdigest()
