"""Calculation libraries (stateless metrics and incremental calculators)."""
