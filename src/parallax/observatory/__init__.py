from .session import ObservingSession

__all__ = ["ObservingSession"]
