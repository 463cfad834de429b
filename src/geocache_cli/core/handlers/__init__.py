"""One handler per command variant.

Each operation is split into a pure ``build_*_request`` function and a
``handle_*`` function that sends the request through the session and
renders the validated response.
"""

from geocache_cli.core.handlers.caches import (
    handle_cache_change,
    handle_cache_create,
    handle_cache_delete,
    handle_cache_find,
    handle_cache_view,
)
from geocache_cli.core.handlers.keys import (
    handle_key_generate,
    handle_key_revoke,
    handle_key_view,
)
from geocache_cli.core.handlers.users import (
    handle_user_change,
    handle_user_create,
    handle_user_view,
)

__all__: list[str] = [
    "handle_cache_change",
    "handle_cache_create",
    "handle_cache_delete",
    "handle_cache_find",
    "handle_cache_view",
    "handle_key_generate",
    "handle_key_revoke",
    "handle_key_view",
    "handle_user_change",
    "handle_user_create",
    "handle_user_view",
]
