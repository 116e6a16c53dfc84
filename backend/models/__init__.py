"""Models package - settings, pydantic schemas and domain exceptions."""
