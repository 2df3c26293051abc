# gathering_agent/gatherers/__init__.py - Gatherers module
"""
Fact gatherers and their registry.

This module provides:
- base.py: Gatherer capability
- facts.py: Fact requests and gathered facts
- registry.py: Versioned gatherers registry and its builder
- runner.py: Invocation of the gatherers of a request
"""
