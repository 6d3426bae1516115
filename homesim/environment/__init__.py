from homesim.environment.home import TARGET_TEMPERATURE_KEY, HomeEnvironment

__all__ = ["HomeEnvironment", "TARGET_TEMPERATURE_KEY"]
