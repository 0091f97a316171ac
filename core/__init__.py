"""
Core module for shared domain infrastructure.

This module contains:
- Domain events, exceptions and value objects
- Event bus and event handlers
- Middleware components
- Metrics, tracing and background tasks
"""
