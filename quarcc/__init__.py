"""Trading engine building blocks: messages, order IDs, positions, SQLite persistence and a paper gateway."""

__version__ = "0.1.0"