"""Transport and observability building blocks."""
