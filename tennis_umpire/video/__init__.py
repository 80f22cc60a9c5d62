from .loader import VideoLoader

__all__ = ["VideoLoader"]
