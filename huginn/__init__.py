"""huginn: a terminal system information fetcher."""

__version__ = "0.1.0"
