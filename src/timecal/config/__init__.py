import os


def get_settings_module() -> str:
    # Settings module chosen by TIMECAL_ENV, 'development' by default
    env = os.getenv("TIMECAL_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "timecal.config.production"

    if env in {"test", "testing"}:
        return "timecal.config.testing"

    return "timecal.config.development"
