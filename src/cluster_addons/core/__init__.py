"""Core framework: configuration and plugin contract."""
