"""
Unit tests for the BX-bot UI server.

Unit tests exercise individual components in isolation. They are fast,
deterministic, and need no external services.
"""
