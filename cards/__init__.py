"""
Cards module - license card issuance, binding and expiry.

This module handles:
- Card entity and lifecycle rules
- Card key generation
- First-use device binding
- Expiry sweeps, listing and HWID inspection
- Administrative unbind
"""
