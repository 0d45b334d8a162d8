"""
Models package.

Contains shared Pydantic models used across multiple modules.
Module-specific models are located in their respective module directories.
"""

from beam_verifier.models.errors import ProblemDetail

__all__ = ["ProblemDetail"]
