"""Alexa skill that adds spoken items to the Cookidoo shopping list."""

__version__ = "1.0.0"
