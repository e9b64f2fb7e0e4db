"""Command line interface for netresolve."""
