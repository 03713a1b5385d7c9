"""Core integrity pipeline: hashing, manifest patching, update, verify, inject, release."""
