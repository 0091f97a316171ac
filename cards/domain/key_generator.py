"""
Card key generation.

Keys are the MD5 hex digest of a random UUID4: 32 lowercase hex
characters carrying 122 bits of randomness.
"""
import hashlib
import uuid


def generate_card_key() -> str:
    """
    Generate a new card key.

    Returns:
        32 character lowercase hex string
    """
    return hashlib.md5(str(uuid.uuid4()).encode("utf-8")).hexdigest()


def generate_batch_id() -> str:
    """Generate a batch identifier shared by all cards of one generate call."""
    return str(uuid.uuid4())
