"""Request and response models, request building, multipart forms and stream reading for a GPT-style HTTP API."""

__version__ = "0.1.0"