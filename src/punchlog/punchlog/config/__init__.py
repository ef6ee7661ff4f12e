import os


def get_settings_module() -> str:
    # Read the environment from APP_ENV, defaulting to 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "punchlog.config.production"

    if env in {"test", "testing"}:
        return "punchlog.config.testing"

    return "punchlog.config.development"
