"""Packet codec, TCP and UDP packet connections, settings, stage lookups and JSON API helpers for a multiplayer game server."""

__version__ = "0.1.0"

__all__ = [
    "errors",
    "geometry",
    "game_mode",
    "stages",
    "packet",
    "connection",
    "udp_conn",
    "settings",
    "block_clients",
    "status_settings",
]