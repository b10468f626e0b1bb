"""Shared helpers: environment config, logging, retry and timestamp parsing."""
