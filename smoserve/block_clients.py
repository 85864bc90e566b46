"""Blocking of API clients that send too many bad requests."""

from __future__ import annotations

import ipaddress
import logging

_log = logging.getLogger(__name__)

MAX_TRIES = 5
_COUNTER_MAX = 0xFF


class BlockClients:
    """Counts failed requests per IP address; five failures block it."""

    def __init__(self) -> None:
        self._failures: dict[ipaddress.IPv4Address | ipaddress.IPv6Address, int] = {}

    @staticmethod
    def _key(ip):
        return ipaddress.ip_address(ip)

    def is_blocked(self, ip) -> bool:
        """Whether ``ip`` has failed too often."""
        return self._failures.get(self._key(ip), 0) >= MAX_TRIES

    def fail(self, ip) -> int:
        """Record a failed request and return the address's failure count."""
        key = self._key(ip)
        count = min(self._failures.get(key, 0) + 1, _COUNTER_MAX)
        self._failures[key] = count
        if count >= MAX_TRIES:
            _log.warning("Block client %s because of too many failed requests.", key)
        return count

    def redeem(self, ip) -> None:
        """Forget the failures of ``ip`` after a good request."""
        self._failures.pop(self._key(ip), None)