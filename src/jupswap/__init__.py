"""Jupiter swap execution and Solana wallet reporting service."""

__version__ = "0.1.0"
