"""Domain layer — recurrence rules, keyword recognition, occurrence search.

This layer depends only on stdlib.
It must never import from services, commands, output, or config.
"""
