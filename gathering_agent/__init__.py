# gathering_agent/__init__.py - Fact gathering agent
"""
Fact gathering agent for distributed infrastructure checks.
"""

__version__ = "0.1.0"
