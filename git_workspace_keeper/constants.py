"""Shared constants for git-workspace-keeper."""

# Sentinels reported in place of a branch name
DETACHED_BRANCH = "(detached)"
UNKNOWN_BRANCH = "unknown"

# Used when a bare repository's symbolic HEAD cannot be resolved
FALLBACK_DEFAULT_BRANCH = "main"

HEADS_PREFIX = "refs/heads/"

# Bare clones don't configure a fetch refspec for origin
ORIGIN_FETCH_REFSPEC = "+refs/heads/*:refs/remotes/origin/*"

# Seconds before a git invocation is killed
DEFAULT_TIMEOUT = 30.0

# Entries starting with this prefix are never treated as workspaces
HIDDEN_PREFIX = "."

# Version-control metadata marker inside a checked-out repository
GIT_MARKER = ".git"

# Symbol constants
SYMBOL_DIRTY = " *"
INDENT = "  "

# Empty-children annotations, keyed by convention value
EMPTY_ANNOTATIONS = {
    "bare": "(no worktrees)",
    "container": "(no repos)",
}
