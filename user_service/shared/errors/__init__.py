"""
Shared error handling package.

Centralizes the error taxonomy so that domain errors are translated
identically into HTTP and gRPC responses.
"""
