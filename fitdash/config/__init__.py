from fitdash.config.settings import settings

__all__ = ["settings"]
