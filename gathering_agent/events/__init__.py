# gathering_agent/events/__init__.py - Event handling module
"""
Event handling for execution requests.

This module provides:
- contracts.py: Envelope and payload codec
- dispatcher.py: Filtering of events addressed to the local agent
- aggregator.py: Grouping of fact requests by gatherer
- consumer.py: Message adapter acknowledging every delivery
"""
