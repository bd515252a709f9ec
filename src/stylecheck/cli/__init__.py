"""Command-line host for the stylecheck engine."""
