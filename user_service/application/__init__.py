"""
Application layer package.

Contains the service that orchestrates domain ports, and the DTOs
that carry data in from the interface layer.
This layer depends on domain ports, never on infrastructure.
"""
