class SensorUnavailableError(RuntimeError):
    """Camera could not be opened or the landmark model failed to load."""
