"""Request builders, response models, JSON schema helpers, rate-limit parsing and stream reading for a chat-completion style API."""

__version__ = "0.1.0"