"""Adapters translating collaborator payloads to and from the domain model."""
