"""
Schemas module - Request bodies and update field masks for API endpoints.
"""
