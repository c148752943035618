"""DataMind feature modules."""
