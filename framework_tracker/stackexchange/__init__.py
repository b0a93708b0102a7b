"""Stack Exchange client package."""

from .client import StackExchangeClient
from .models import StackOverflowPost

__all__ = ["StackExchangeClient", "StackOverflowPost"]
