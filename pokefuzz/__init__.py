"""Exhaustive-coverage fuzz harness for Pokemon Showdown style battle simulators."""

__version__ = "0.1.0"
