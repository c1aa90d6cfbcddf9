"""Generate goal-driven timelines with an AI chat model and store them in MySQL."""

__version__ = "0.1.0"