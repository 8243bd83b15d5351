"""PlayStream — read-along narration with word and sentence highlighting."""

__version__ = "0.1.0"
