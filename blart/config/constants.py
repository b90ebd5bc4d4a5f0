"""
Configuration-related constants and resource limits.
"""

# Prefix of environment variables that override config values
ENV_PREFIX = "BLART_"

# Maximum config file size (1MB); a watch list never needs more
MAX_CONFIG_SIZE_BYTES = 1024 * 1024
