"""
campus-portal core.

Role derivation from institutional emails, action permissions, and keyword
content moderation for a college community portal.
"""

__version__ = "0.1.0"
