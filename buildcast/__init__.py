"""buildcast: build status coordination and live broadcast.

Folds the invalidated/done events of a client and a server compilation
target into one visible build status, and fans every change out to the
connected listeners:
  - ``BuildStatusCoordinator`` owns the state machine
  - ``ListenerRegistry`` owns the listener set and fan-out
  - ``TargetHooks`` is the in-process pipeline hook hub
"""

__version__ = "0.1.0"

from buildcast.core.coordinator import BuildStatusCoordinator
from buildcast.core.pipeline import CompilationTarget, TargetHooks
from buildcast.core.registry import ListenerRegistry
from buildcast.models.status import CompilationResult, StatusAction, StatusMessage

__all__ = [
    "BuildStatusCoordinator",
    "ListenerRegistry",
    "CompilationTarget",
    "TargetHooks",
    "CompilationResult",
    "StatusAction",
    "StatusMessage",
    "__version__",
]
