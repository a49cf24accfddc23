"""
Root conftest.py for the BX-bot UI server tests.

This file contains pytest configuration and plugins that apply to the entire test suite.
"""

# Pytest plugins configuration
pytest_plugins = ["pytest_asyncio"]
