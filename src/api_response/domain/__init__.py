"""Domain layer — errors, sub-errors, and the clock they are stamped with.

This layer depends only on stdlib and pydantic.
It must never import from config or the codec.
"""
