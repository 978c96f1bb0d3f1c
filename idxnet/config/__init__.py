from .logging import configure_logging
from .models import GraphOptions

__all__ = ["GraphOptions", "configure_logging"]
