"""FastAPI service for the RSS aggregator.

This package provides the /v1 REST API: a health check, an error envelope
example and user creation backed by PostgreSQL.
"""

__version__ = "0.1.0"
