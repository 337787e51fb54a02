"""Settings modules, one per deployment; ``APP_ENV`` chooses between them."""
import os

DEFAULT_SETTINGS = "config.development"

_BY_ENV = {
    "production": "config.production",
    "prod": "config.production",
    "testing": "config.testing",
    "test": "config.testing",
    "development": DEFAULT_SETTINGS,
    "dev": DEFAULT_SETTINGS,
}


def get_settings_module(env=None) -> str:
    """Dotted path of the settings module for ``env`` (default: ``$APP_ENV``)."""
    if env is None:
        env = os.getenv("APP_ENV", "")
    return _BY_ENV.get(env.strip().lower(), DEFAULT_SETTINGS)
