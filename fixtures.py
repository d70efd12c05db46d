"""
Placeholder values for demos and tests.

Nothing produced here is verified. A fabricated identity is not an
authenticated account and a mock artifact hash does not address any content.
Production callers pass real values and never reach these helpers.
"""

import random
import secrets
import string

HASH_PREFIX = "Qm"
HASH_BODY_LENGTH = 44
HASH_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits

_rng = random.SystemRandom()


def generate_mock_artifact_hash() -> str:
    """A content-identifier-shaped filler: "Qm" + 44 chars of [A-Za-z0-9]."""
    return HASH_PREFIX + "".join(_rng.choice(HASH_ALPHABET) for _ in range(HASH_BODY_LENGTH))


def fabricate_identity() -> str:
    """An account-shaped filler: "0x" + 40 lowercase hex chars."""
    return "0x" + secrets.token_hex(20)


def is_mock_artifact_hash(value: str) -> bool:
    """True if value has the shape produced by generate_mock_artifact_hash()."""
    body = value[len(HASH_PREFIX):]
    return (
        value.startswith(HASH_PREFIX)
        and len(body) == HASH_BODY_LENGTH
        and all(c in HASH_ALPHABET for c in body)
    )
