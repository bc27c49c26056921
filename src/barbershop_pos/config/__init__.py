import os


def get_settings_module() -> str:
    # Environment comes from APP_ENV, default 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "barbershop_pos.config.production"

    if env in {"test", "testing"}:
        return "barbershop_pos.config.testing"

    return "barbershop_pos.config.development"
