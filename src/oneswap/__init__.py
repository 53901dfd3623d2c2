"""oneswap - swap tokens through the 1inch aggregator from the command line."""

__version__ = "0.1.0"
