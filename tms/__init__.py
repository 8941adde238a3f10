"""TMS — a single-tape Turing machine simulator."""

__version__ = "1.0.0"
