"""PC build configuration inventory manager."""

__version__ = "0.1.0"
