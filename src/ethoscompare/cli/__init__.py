"""ethoscompare command line interface."""
