"""
Weather layer.

Responsibilities:
- Manage OpenWeatherMap configuration and credentials.
- Fetch current weather for a latitude/longitude pair.
- Fall back to a fixed dummy payload when the upstream is unavailable.
- Turn temperature and condition into a context tag and a flavor sentence.
"""
