"""Core secret sharing: field arithmetic, share generation and reconstruction."""
