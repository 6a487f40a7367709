"""
Users bounded context — domain layer.

Holds the User entity, the error taxonomy shared by every transport,
and the ports (storage, password hashing) the service depends on.
"""
