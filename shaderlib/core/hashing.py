"""
Hashing of shader source text and composite values.
"""

import json
import hashlib


jsonencoder = json.JSONEncoder(separators=(",", ":"))


def hash_source(source):
    """Get a 64-bit integer identifying the given text.

    Uses BLAKE2b, so that texts with the same characters in a different
    order (which a plain character sum would conflate) get different hashes.
    Returns None if the source is not a string.
    """
    if not isinstance(source, str):
        return None
    digest = hashlib.blake2b(source.encode(), digest_size=8).digest()
    return int.from_bytes(digest, "big")


def hash_from_value(value):
    """Simple way to create a hash from a (possibly composite) object.
    Assumes JSON encodable objects.
    """
    # Encode the value to string using json. The JSON encoder is so fast that
    # its hard to come up with something that can serialze to str faster.
    return hash_source(jsonencoder.encode(value))
