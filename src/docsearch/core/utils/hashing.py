"""Content fingerprints for record identity"""

import hashlib


def md5(content: str) -> str:
    """Return hex-encoded MD5 of content (32 chars); identity only, not security."""
    return hashlib.md5(content.encode("utf-8")).hexdigest()
