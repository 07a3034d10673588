"""Calculation systems."""
