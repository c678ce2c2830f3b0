"""Business logic layer for shares app."""
