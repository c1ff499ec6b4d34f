"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, shared
read-only by the matcher and generator a Router builds.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(base_url="https://example.com")
    """

    # Absolute generation: scheme and host, e.g. "https://example.com"
    base_url: str = ""

    # Parameters with this key prefix never reach the query string
    internal_prefix: str = "_"

    # Default for generate_multiple(): raise on the first failing entry
    # instead of skipping it
    strict_generation: bool = False
