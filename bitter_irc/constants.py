"""
Configuration constants for the bitter_irc Twitch channel client

This module contains the provider defaults used throughout the package.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Attempts to parse the environment variable as a float. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


# Twitch IRC endpoint
TWITCH_IRC_URI = _get_env_str("TWITCH_IRC_URI", "irc.chat.twitch.tv")
TWITCH_IRC_PORT = _get_env_int("TWITCH_IRC_PORT", 6667)
TWITCH_IRC_TLS_PORT = _get_env_int("TWITCH_IRC_TLS_PORT", 443)
TWITCH_IRC_SERVER = f"{TWITCH_IRC_URI}:{TWITCH_IRC_PORT}"
TWITCH_IRC_TLS_SERVER = f"{TWITCH_IRC_URI}:{TWITCH_IRC_TLS_PORT}"

# Payload Twitch expects in the PONG reply to its PING
TWITCH_PONG_PAYLOAD = _get_env_str("TWITCH_PONG_PAYLOAD", "tmi.twitch.tv")

# Channel-name marker prepended to the channel on JOIN / PRIVMSG
CHANNEL_PREFIX = "#"

# Timeouts
IRC_IDLE_TIMEOUT = _get_env_float(
    "IRC_IDLE_TIMEOUT", 600.0
)  # Max seconds without an inbound frame before the loop gives up (Twitch pings ~5 min)
IRC_CONNECT_TIMEOUT = _get_env_float(
    "IRC_CONNECT_TIMEOUT", 10.0
)  # Seconds allowed for dialing the server

# Capabilities requested after JOIN (comma separated override)
IRC_DEFAULT_CAPABILITIES: tuple[str, ...] = tuple(
    cap.strip()
    for cap in _get_env_str("IRC_DEFAULT_CAPABILITIES", "twitch.tv/commands").split(",")
    if cap.strip()
)

# Wire limits
IRC_MAX_LINE_BYTES = _get_env_int(
    "IRC_MAX_LINE_BYTES", 64 * 1024
)  # Tagged Twitch lines regularly exceed the RFC 512 byte limit
