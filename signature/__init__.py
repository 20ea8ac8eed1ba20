"""
Core Signature module.

Stamps a signature image onto selected pages of a stored PDF at a
normalized placement box, preserving the image's aspect ratio, and tracks
the SHA-256 lineage of original and signed artifacts.
"""
