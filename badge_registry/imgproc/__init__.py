"""Badge photo fingerprinting and normalisation."""

from .fingerprint import ContentFingerprinter
from .normalize import DecodeError, ImageNormalizer

__all__ = ["ContentFingerprinter", "DecodeError", "ImageNormalizer"]
