"""LINE webhook bot that translates between English and Thai."""

__version__ = "0.1.0"
