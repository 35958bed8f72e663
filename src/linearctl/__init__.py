"""linearctl — Linear issue tracking exposed as agent-callable operations."""

__version__ = "0.1.0"
