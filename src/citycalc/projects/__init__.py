"""Pricing projects shipped with the calculator."""
