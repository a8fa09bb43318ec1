"""Content fingerprints used to detect changed badge photos."""

from __future__ import annotations

import hashlib


class ContentFingerprinter:
    """SHA-1 of the raw bytes; an equality check, not a security credential."""

    def fingerprint(self, data: bytes) -> str:
        return hashlib.sha1(data, usedforsecurity=False).hexdigest()
