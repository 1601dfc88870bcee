"""vargraph command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``vargraph`` script).
"""

from vargraph.cli.main import cli

__all__ = ["cli"]
