"""Stable 64-bit fingerprints for percentile bucketing.

Bucket membership must agree across every service that evaluates the same
template, so the fingerprint algorithm is fixed: FarmHash Fingerprint64 over
the UTF-8 bytes of the input string.
"""

from abc import ABC, abstractmethod

import farmhash

UINT64_MASK = 0xFFFFFFFFFFFFFFFF


class Fingerprinter(ABC):
    """Abstract base class for 64-bit string fingerprints."""

    @abstractmethod
    def fingerprint64(self, value: str) -> int:
        """Fingerprint a string.

        Args:
            value: String to fingerprint

        Returns:
            Unsigned 64-bit integer, stable across processes and versions
        """
        pass


class FarmHashFingerprinter(Fingerprinter):
    """FarmHash Fingerprint64, the algorithm used by the remote config backend."""

    def fingerprint64(self, value: str) -> int:
        return farmhash.fingerprint64(value) & UINT64_MASK

    def __repr__(self) -> str:
        return "FarmHashFingerprinter()"
