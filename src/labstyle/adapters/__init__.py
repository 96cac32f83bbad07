"""Adapters that turn raw document text into rules-engine models."""
