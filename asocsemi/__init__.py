"""ASOCSEMI company website."""
