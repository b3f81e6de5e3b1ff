"""Integration tests.

Purpose
- Exercise YAML loading, the OGM probe and `bootstrap()` end to end.

Guidelines
- Write configuration files under `tmp_path`; never read the user's own.
- Point `NEOBUNDLE_CONFIG` and `NEOBUNDLE_CACHE_DIR` at temporary paths.
"""
