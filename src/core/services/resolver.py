"""Path templates of the heaverd-ng v2 API and their resolution."""

from __future__ import annotations

import re

from core.domain.context import API_VERSION, RunContext
from core.errors import UnresolvedPlaceholderError

CREATE_PATH = "/c/:cid"
CREATE_IN_POOL_PATH = "/p/:poolid/:cid"
START_PATH = "/c/:cid/start"
STOP_PATH = "/c/:cid/stop"
DESTROY_PATH = "/c/:cid"
HOSTS_PATH = "/h"
HOST_STATS_PATH = "/h/:hid/stats"

_PLACEHOLDER = re.compile(r":([a-z]+)")


def substitute(template: str, context: RunContext) -> str:
    """Replace each placeholder of `template` once with its context value.

    Raises:
        UnresolvedPlaceholderError: the template names an unknown
            placeholder or repeats one.
    """

    values = {
        "cid": context.container_name,
        "poolid": context.pool_name,
        "hid": context.host_name,
    }
    seen: set[str] = set()

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values or name in seen:
            raise UnresolvedPlaceholderError(template, match.group(0))
        seen.add(name)
        return values[name]

    return _PLACEHOLDER.sub(replace, template)


def api_url(template: str, context: RunContext) -> str:
    """Absolute URL: `<base_url><api_version><path>`."""

    return f"{context.base_url}{API_VERSION}{substitute(template, context)}"
