"""Configuration: section models, settings resolution, logging setup."""
