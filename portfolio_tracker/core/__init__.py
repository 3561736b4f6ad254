"""Portfolio domain logic."""
