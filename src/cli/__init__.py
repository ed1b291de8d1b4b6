"""Command line interface for the node accessor generator."""
