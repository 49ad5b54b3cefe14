"""RenderMan shader node discovery with alias resolution."""

from rmandisco.engine import DiscoveryEngine
from rmandisco.models import DiscoveryRecord
from rmandisco.models import SearchConfiguration

__version__ = "0.1.0"

__all__ = [
    "DiscoveryEngine",
    "DiscoveryRecord",
    "SearchConfiguration",
    "__version__",
]
