"""
Interfaces layer package.

Contains the FastAPI routers, Pydantic request/response schemas and
the gRPC servicer. No business logic belongs here: adapters decode
requests into DTOs, call the user service and encode the outcome.
"""
