"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- Database repositories (sessions, work queue, SQL caches)
- Redis caches (alternative cache backend)
- Geolocation and weather HTTP clients
- Logging adapter and the batch scheduler

Structure:
- persistence/: SQLAlchemy models, repositories, dialect helpers
- cache/: Redis adapter and Redis-backed enrichment caches
- enrichers/: External lookup clients (httpx)
- jobs/: Fixed-interval scheduler

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
