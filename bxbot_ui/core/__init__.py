"""Core framework: configuration, exceptions, logging, base classes and types."""
