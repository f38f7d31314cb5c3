"""Adapters implementing the entry-import ports."""
