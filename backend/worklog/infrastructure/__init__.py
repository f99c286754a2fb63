"""
Infrastructure Layer

Concrete implementations of the interfaces defined in the domain layer.

Components:
- cache/: Versioned reference-data cache
- gateways/: In-process and HTTP master-data sources
- repositories/: In-memory task repository
"""
