"""Internal modules for httpdispatch.

These are used by HttpClient and are not a stable API.

Modules:
    dispatch - Request dispatcher and pending-request table
    http - Shared HTTP client configuration
"""
