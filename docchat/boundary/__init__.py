"""
Boundary layer for external system integrations.

Handles all interactions with external systems (database, answer and PDF proxies, LLM vendors).
Provides adapters and clients for infrastructure dependencies.
"""
