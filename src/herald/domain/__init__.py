"""HERALD domain layer: channels, providers, integrations and environments."""
