"""
Jobmatch API
REST backend for a job-matching platform.

Architecture:
- PostgreSQL: jobseekers, employers and every profile sub-resource
- FastAPI routers issue parameterized SQL directly (no ORM models)
"""

__version__ = "1.0.0"
