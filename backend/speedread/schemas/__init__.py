"""
API Schemas Module
Request and response schemas for the REST API.
"""
