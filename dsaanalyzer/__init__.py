"""DSA Analyzer: LLM-backed complexity analysis and debugging."""

__version__ = "1.0.0"
