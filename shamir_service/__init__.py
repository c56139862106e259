"""Shamir Secret Sharing Service.

Splits an integer secret into n shares over a prime field so that any k of
them reconstruct it and fewer than k reveal nothing. Exposed as a library
(``shamir_service.core``) and as a small HTTP API (``shamir_service.main``).
"""

__version__ = "1.0.0"
__author__ = "Shamir Service Contributors"
