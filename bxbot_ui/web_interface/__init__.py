"""Web interface support for the BX-bot UI server."""
