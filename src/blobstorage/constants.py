# Configuration Constants
XOR_NAME_LEN = 32  # bytes in a blob name
CHUNK_SIZE = 32768  # 32KB chunks
FETCH_TIMEOUT = 10  # seconds to wait on relays per read

# Event Kinds
BLOB_KIND = 4212  # regular kind, relays store it

DEFAULT_RELAYS = ['wss://relay.damus.io', 'wss://nos.lol']

# Event tags
NAME_TAG = 'x'
VARIANT_TAG = 'blob'
OWNER_TAG = 'owner'
