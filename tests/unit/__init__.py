"""Unit tests.

Purpose
- Verify parsing, resolution and rendering of a bundle in isolation.

Guidelines
- No real config files; feed raw trees through `parse_config`.
- Inject the OGM capability and the cache root instead of probing the host.
"""
