"""
Users Service — account management over REST and gRPC.

Application package root. This is a small service using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - users: Account creation, lookup, credential checks, partial updates.

Layers:
    - domain: Entities, ports (ABCs), errors. No framework imports.
    - application: The user service, DTOs.
    - infrastructure: Adapters (SQL, in-memory, bcrypt) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas, gRPC servicer.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
