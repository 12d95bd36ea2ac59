"""
Schemas module - Request/Response schemas for API endpoints.

Request schemas reject unknown fields; response schemas serialize with
camelCase names.
"""
