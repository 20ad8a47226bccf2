"""Integration tests for blog asset sync.

These tests drive complete pipelines over real temporary directories
against the in-memory store from tests.helpers, covering multi-run
behaviour such as the mirror invariant and recovery from partial failures.
"""
