"""
gRPC interface for the users bounded context.

Exposes the user service as ``user_service.v1.UserService``. Messages
are JSON documents validated by Pydantic models; errors map to gRPC
status codes through the shared taxonomy.
"""
