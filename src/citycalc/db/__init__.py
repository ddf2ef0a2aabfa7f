"""Persistence models for stored cities."""
