"""Core rules engine for Bondtolva."""

__all__ = [
    "cards",
    "deck",
    "moves",
    "rules_schema",
    "state",
    "trick",
    "mechanics",
    "scoring",
    "game",
    "service",
]
