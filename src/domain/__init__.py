"""Domain layer - Pure enrichment logic types.

This layer contains the entities, value objects and protocols (ports) of the
session enrichment worker. It has NO dependencies on any framework or
infrastructure - it is pure Python.

Structure:
- entities/: Sessions and dequeued work items
- value_objects/: Geolocation and weather snapshots
- protocols/: Ports implemented by infrastructure (storage, resolvers, logging)
"""
