"""Host process side: repository access on worker threads"""

from gitlane.host.bridge import GitHost
from gitlane.host.workers import perform_checkout

__all__ = ["GitHost", "perform_checkout"]
