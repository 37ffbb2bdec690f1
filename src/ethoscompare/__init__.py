"""ethoscompare: Ethos reputation profile resolution and comparison."""

__version__ = "0.1.0"
