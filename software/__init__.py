"""
Software module - published client version and availability switch.

This module handles:
- The singleton software version record
- Public read access for clients checking for updates
"""
