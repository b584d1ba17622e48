"""ship: release orchestrator and HTTP request composer."""

__version__ = "0.1.0"
