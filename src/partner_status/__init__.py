"""Partner Status - share what you're up to with your partner in real time."""

__version__ = "0.1.0"
