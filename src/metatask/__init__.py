"""meta-task: tasks bound to a tmux session and a git branch of the same name."""

__version__ = "0.1.0"
