"""dirstat package initialisation."""

__all__ = [
    "core",
    "reporting",
    "shared",
]
