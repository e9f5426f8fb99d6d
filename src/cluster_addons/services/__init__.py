"""Service layer orchestrating integration clients."""
