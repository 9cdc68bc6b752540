"""Git patches, patch series events, replies, configuration values and repository state for Nostr."""

__version__ = "0.4.0"