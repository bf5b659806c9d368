"""Recognition of symbols drawn on an 8x8 pixel grid with a small neural network."""

__version__ = "0.1.0"

__all__ = ["__version__"]