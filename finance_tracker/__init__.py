"""Personal finance tracker core: aggregation and subscription billing."""

__version__ = "0.1.0"
