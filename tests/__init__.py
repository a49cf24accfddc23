"""Test suite for the BX-bot UI server."""
