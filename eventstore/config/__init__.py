"""Configuration package for eventstore."""
