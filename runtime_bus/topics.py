"""Topic constants for the runtime bus."""

# Workspace registry mutations (published after the mutation completed)
WORKSPACE_CREATED = "workspace.created"
WORKSPACE_KILLED = "workspace.killed"
WORKSPACE_KILLED_OTHERS = "workspace.killed_others"
WORKSPACE_RENAMED = "workspace.renamed"
WORKSPACE_SWITCHED = "workspace.switched"
WORKSPACE_SWITCHED_LAST = "workspace.switched_last"
WORKSPACE_NEXT = "workspace.next"
WORKSPACE_PREVIOUS = "workspace.previous"
WORKSPACE_STATE_LOADED = "workspace.state.loaded"
WORKSPACE_STATE_RESTORED = "workspace.state.restored"

WORKSPACE_MUTATION_TOPICS = (
    WORKSPACE_CREATED,
    WORKSPACE_KILLED,
    WORKSPACE_KILLED_OTHERS,
    WORKSPACE_RENAMED,
    WORKSPACE_SWITCHED,
    WORKSPACE_SWITCHED_LAST,
    WORKSPACE_NEXT,
    WORKSPACE_PREVIOUS,
    WORKSPACE_STATE_LOADED,
    WORKSPACE_STATE_RESTORED,
)

__all__ = [
    "WORKSPACE_CREATED",
    "WORKSPACE_KILLED",
    "WORKSPACE_KILLED_OTHERS",
    "WORKSPACE_RENAMED",
    "WORKSPACE_SWITCHED",
    "WORKSPACE_SWITCHED_LAST",
    "WORKSPACE_NEXT",
    "WORKSPACE_PREVIOUS",
    "WORKSPACE_STATE_LOADED",
    "WORKSPACE_STATE_RESTORED",
    "WORKSPACE_MUTATION_TOPICS",
]
