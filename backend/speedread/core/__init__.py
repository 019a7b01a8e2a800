"""
Core Module
Errors and FastAPI dependencies.
"""
