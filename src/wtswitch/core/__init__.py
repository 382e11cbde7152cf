"""Core worktree logic and configuration, free of terminal I/O."""
