"""
Cross-origin policy.

Translates the configured origin patterns into CORSMiddleware options. A
pattern may contain '*' wildcards ("https://*" matches any https origin);
a bare "*" allows every origin.
"""

import re
from typing import Any, Dict, List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.src.config import Settings


def origin_patterns_to_regex(patterns: List[str]) -> Optional[str]:
    """
    Build one anchored regex matching any of the wildcard origin patterns.

    Args:
        patterns: Origin patterns such as "https://*" or "https://*.example.com"

    Returns:
        Regex string, or None when no pattern contains a wildcard
    """
    wildcard = [p for p in patterns if "*" in p and p != "*"]
    if not wildcard:
        return None
    alternatives = [".*".join(re.escape(part) for part in p.split("*")) for p in wildcard]
    return "^(?:" + "|".join(alternatives) + ")$"


def cors_options(settings: Settings) -> Dict[str, Any]:
    """CORSMiddleware keyword arguments for the configured policy."""
    origins = settings.cors_allowed_origins
    if "*" in origins:
        allow_origins = ["*"]
        allow_origin_regex = None
    else:
        allow_origins = [o for o in origins if "*" not in o]
        allow_origin_regex = origin_patterns_to_regex(origins)

    return {
        "allow_origins": allow_origins,
        "allow_origin_regex": allow_origin_regex,
        "allow_methods": settings.cors_allowed_methods,
        "allow_headers": settings.cors_allowed_headers,
        "expose_headers": settings.cors_exposed_headers,
        "allow_credentials": settings.cors_allow_credentials,
        "max_age": settings.cors_max_age,
    }


def add_cors_middleware(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(CORSMiddleware, **cors_options(settings))
