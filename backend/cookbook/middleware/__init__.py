"""
Cookbook Backend: Middleware Package
=====================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

The request id is set first so every access log line and error envelope
carries it.
"""
