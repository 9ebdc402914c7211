"""Federal individual income tax computation engine."""

__version__ = "0.1.0"
