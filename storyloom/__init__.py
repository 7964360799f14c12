"""Storyloom — prompt template resolution for a story-writing app."""
