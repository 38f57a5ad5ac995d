"""Steering and flocking simulation core."""
