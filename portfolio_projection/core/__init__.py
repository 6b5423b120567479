"""Numerical core: randomness, path generation, validation and phases."""
