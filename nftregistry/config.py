import os
from pathlib import Path

DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

DEFAULT_COLLECTION = 'collection'
DEFAULT_NAME_SERVICE = 'names'

# Registry variables
ADMIN_KEY = '__admin__'
TOKEN_COUNT = 'token_count'
SUPPLY = 'supply'
OWNERS = 'owners'
BALANCES = 'balances'
APPROVALS = 'approvals'
OPERATORS = 'operators'

NULL_IDENTITY = None

# Durable identities are 32 byte verifying keys in hex
IDENTITY_PATTERN = r'^[0-9a-f]{64}$'

STORAGE_HOME = Path(os.getenv('NFTREGISTRY_HOME', Path.home().joinpath('.nftregistry')))
STATE_FILE_EXT = '.json'

EXPORT_ATTRIBUTE = '__export__'
PRIVATE_METHOD_PREFIX = '_'
