"""
Activations module - License validation and machine binding.

This module handles:
- Validating license keys from client applications
- Binding a license to the first machine that uses it
- Owner-initiated binding resets
"""
