"""Defines common Value Objects used across the domain.

Thin NewType wrappers that give semantic names to plain strings and ints
flowing between the client, its services and the CLI.
"""

from typing import Any, Dict, NewType

# === Session Context ===
SessionTokenValue = NewType("SessionTokenValue", str)  # Opaque server-issued token
CategoryId = NewType("CategoryId", int)                # 0 is reserved for "any category"

# === Transport Context ===
EndpointPath = NewType("EndpointPath", str)            # e.g. '/api.php'
QueryParams = Dict[str, str]
JsonPayload = Dict[str, Any]
