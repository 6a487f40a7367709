"""
Shared module package.

Contains cross-cutting concerns used by both transports:
- Error taxonomy and HTTP error handlers
- Security middleware
- Rate limiting
- Logging configuration
"""
