# gathering_agent/exporters/__init__.py - Exporters module
"""
Exporters for agent output and metrics.

This module provides:
- prometheus.py: Prometheus metrics exporter
- stdout.py: Console output exporter
"""
