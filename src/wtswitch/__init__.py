"""
wtswitch - git worktree switching

Create, remove and hop between git worktrees of one repository while keeping
your place in the file you were editing.
"""

__version__ = "0.3.0"

from wtswitch.core.config.models import WorktreesConfig
from wtswitch.core.worktree import FlowResult, Worktree, WorktreeService

__all__ = ["WorktreesConfig", "Worktree", "WorktreeService", "FlowResult", "__version__"]
