"""
Name: Domain Layer Exports

Responsibilities:
  - Re-export the portal's value objects for clean imports
  - Keep infrastructure (FastAPI, settings) out of the domain
"""

from .posts import PostSubmission, PostType
from .users import ParsedEmail, ResolvedRole, StoredRole, UserSnapshot

__all__ = [
    "ParsedEmail",
    "PostSubmission",
    "PostType",
    "ResolvedRole",
    "StoredRole",
    "UserSnapshot",
]
