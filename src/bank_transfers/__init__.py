"""
Bank transfers service: accounts, banks and atomic fund transfers over a
FastAPI + async SQLAlchemy stack.
"""

__version__ = "1.0.0"
