"""
Logique de proxy HTTP vers les upstreams GameHub.
"""

from .client import (
    UpstreamClient,
    create_upstream_client,
    forwardable_headers,
    response_headers,
)
from .transformers import (
    coerce_int,
    int_or_default,
    manifest_path_for_type,
    strip_game_detail,
    sanitize_script_body,
    normalize_manifest,
    paginate_items,
    paginate_manifest,
)
from .responses import (
    json_response,
    text_response,
    preflight_response,
    error_envelope,
    error_response,
    with_cors,
    dumps_compact,
)

__all__ = [
    "UpstreamClient",
    "create_upstream_client",
    "forwardable_headers",
    "response_headers",
    "coerce_int",
    "int_or_default",
    "manifest_path_for_type",
    "strip_game_detail",
    "sanitize_script_body",
    "normalize_manifest",
    "paginate_items",
    "paginate_manifest",
    "json_response",
    "text_response",
    "preflight_response",
    "error_envelope",
    "error_response",
    "with_cors",
    "dumps_compact",
]
