"""vargraph: required-variable resolution for dataset variable requests."""

__version__ = "0.1.0"
