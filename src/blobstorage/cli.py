#!/usr/bin/env python3
import asyncio
import json
import sys

import click
from loguru import logger
from nostr_sdk import Keys

from .address import make_blob
from .chunker import FileChunker, datamap_hash
from .client import NostrBlobClient
from .constants import DEFAULT_RELAYS
from .log import init_logging
from .storage import BlobStorage, BlobStorageDryRun


def _load_keys(private_key):
    if private_key:
        return Keys.parse(private_key)
    keys = Keys.generate()
    click.echo(f"Generated temporary key: {keys.secret_key().to_bech32()}", err=True)
    return keys


@click.group()
@click.option('--log-level', envvar='BLOBSTORAGE_LOG_LEVEL', default='INFO',
              help='loguru log level')
def cli(log_level):
    """blobstorage CLI - Content-addressed blob storage over nostr"""
    init_logging(log_level)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True))
@click.option('--private', 'private', is_flag=True, help='Bind chunks to your key')
@click.option('--dry-run', is_flag=True, help='Compute the datamap without storing')
@click.option('--output', '-o', help='Write the datamap JSON to this path')
@click.option('--relays', multiple=True, default=DEFAULT_RELAYS)
@click.option('--private-key', envvar='BLOBSTORAGE_PRIVATE_KEY', help='Private key (nsec or hex)')
def put(file_path, private, dry_run, output, relays, private_key):
    """Chunk a file and store its chunks as blobs"""
    async def _put():
        keys = _load_keys(private_key)
        client = NostrBlobClient(keys.secret_key().to_hex(), list(relays))

        if dry_run:
            storage = BlobStorageDryRun(client, published=not private)
        else:
            await client.start()
            storage = BlobStorage(client, published=not private)

        with open(file_path, 'rb') as f:
            file_data = f.read()

        try:
            click.echo(f"{'Simulating upload of' if dry_run else 'Uploading'} {file_path}...")
            datamap = await FileChunker(storage).store(file_data)
        finally:
            if not dry_run:
                await client.stop()

        click.echo(f"✓ Datamap hash: {datamap_hash(datamap)}")
        click.echo(f"  Chunks: {len(datamap)}")
        for chunk in datamap:
            click.echo(f"  [{chunk['index']}] {chunk['name']} ({chunk['size']} bytes)")

        if output:
            with open(output, 'w') as f:
                json.dump({'published': not private, 'chunks': datamap}, f, indent=2)

    _run(_put(), "Upload")


@cli.command()
@click.argument('datamap_path', type=click.Path(exists=True))
@click.option('--output', '-o', help='Output file path')
@click.option('--relays', multiple=True, default=DEFAULT_RELAYS)
@click.option('--private-key', envvar='BLOBSTORAGE_PRIVATE_KEY', help='Private key (nsec or hex)')
def get(datamap_path, output, relays, private_key):
    """Download the chunks listed in a datamap file"""
    async def _get():
        with open(datamap_path) as f:
            datamap = json.load(f)

        keys = _load_keys(private_key)
        client = NostrBlobClient(keys.secret_key().to_hex(), list(relays))
        await client.start()

        try:
            storage = BlobStorage(client, published=datamap['published'])
            data = await FileChunker(storage).retrieve(datamap['chunks'])
        finally:
            await client.stop()

        if output:
            with open(output, 'wb') as f:
                f.write(data)
            click.echo(f"✓ Downloaded to {output} ({len(data)} bytes)")
        else:
            click.echo(f"✓ Downloaded {len(data)} bytes")

    _run(_get(), "Download")


@cli.command()
@click.argument('file_path', type=click.Path(exists=True))
@click.option('--private', 'private', is_flag=True, help='Bind the address to your key')
@click.option('--private-key', envvar='BLOBSTORAGE_PRIVATE_KEY', help='Private key (nsec or hex)')
def address(file_path, private, private_key):
    """Print the blob address of a file's whole content"""
    with open(file_path, 'rb') as f:
        file_data = f.read()

    owner = _load_keys(private_key).public_key() if private else None
    click.echo(str(make_blob(file_data, not private, owner).address))


def _run(coro, action):
    try:
        asyncio.run(coro)
    except Exception as e:
        logger.error(f"{action} failed: {e}")
        click.echo(f"✗ {action} failed: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    cli()
