"""Evolve ASCII art that matches an image using a genetic algorithm."""

__version__ = "0.1.0"