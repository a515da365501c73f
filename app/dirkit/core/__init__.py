"""Configuration, XDG paths and the key-value store."""
