"""Services module.

This module provides the service layer architecture:
- exceptions: Custom service exceptions
- sequences: Registration and application number allocation
- candidates: Candidate signup, creation and lookup
- programs: Programme catalogue and per-programme applications
"""
