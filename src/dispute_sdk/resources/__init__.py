from .dispute import DisputeClient

__all__ = ["DisputeClient"]
