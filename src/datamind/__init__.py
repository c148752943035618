"""DataMind - CSV dashboard analysis with a conversational data agent."""

__version__ = "0.1.0"
