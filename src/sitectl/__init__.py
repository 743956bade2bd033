"""sitectl — static content registry and validator for Jekyll-style sites."""

__version__ = "0.1.0"
