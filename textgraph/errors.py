class ConfigError(ValueError):
    """Invalid configuration value or file."""
