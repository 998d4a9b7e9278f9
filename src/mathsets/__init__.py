"""Interactive construction lab for Pascal's triangle."""

__version__ = "0.1.0"
