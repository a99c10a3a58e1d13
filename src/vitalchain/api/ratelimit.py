from __future__ import annotations

import time
from collections import deque
from typing import Deque, Dict, Tuple

from fastapi import HTTPException, Request, status


# Above this many keys, stale windows are swept on the next request
_SWEEP_AT = 1024


def _client_ip(request: Request, trust_forwarded_for: bool) -> str:
    client_host = request.client.host if request.client else ""
    if trust_forwarded_for:
        fwd = request.headers.get("x-forwarded-for", "").split(",")[0].strip()
        if fwd:
            return fwd
    return client_host or "unknown"


def _route_key(request: Request) -> str:
    # Route template, so /api/chain/1 and /api/chain/2 share one window
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _sweep(windows: Dict[Tuple[str, str], Deque[float]], cutoff: float) -> None:
    stale = [k for k, q in windows.items() if not q or q[-1] < cutoff]
    for k in stale:
        del windows[k]


async def general_rate_limit(request: Request) -> None:
    """Sliding-window limiter keyed by (client ip, route template).

    Windows live on app.state so each app instance counts on its own.
    X-Forwarded-For is only honoured when trust_forwarded_for is set.
    """
    s = request.app.state.settings
    max_reqs = int(s.rate_limit_reqs)
    win_s = int(s.rate_limit_window)
    if max_reqs <= 0:
        return

    windows: Dict[Tuple[str, str], Deque[float]] = getattr(
        request.app.state, "rate_windows", None
    )
    if windows is None:
        windows = {}
        request.app.state.rate_windows = windows

    now = time.time()
    cutoff = now - float(win_s)
    if len(windows) > _SWEEP_AT:
        _sweep(windows, cutoff)

    key = (_client_ip(request, bool(s.trust_forwarded_for)), _route_key(request))
    q = windows.get(key)
    if q is None:
        q = windows[key] = deque()
    while q and q[0] < cutoff:
        q.popleft()
    if len(q) >= max_reqs:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "error": "rate_limited",
                "window_seconds": win_s,
                "max_requests": max_reqs,
            },
        )
    q.append(now)
