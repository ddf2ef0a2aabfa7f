"""REST layer."""
