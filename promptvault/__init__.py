"""PromptVault — versioned prompt templates with {{variable}} resolution."""

__version__ = "0.1.0"
