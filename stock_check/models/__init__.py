"""Frozen pydantic models for engine inputs and outputs."""
