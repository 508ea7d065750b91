"""
Authentication module for the MediPredict health portal.

This module provides authentication and authorization functionality including:
- Patient and doctor registration
- JWT token authentication
- Explicit per-request session context
- Role-based access control
"""
