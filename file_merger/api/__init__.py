from . import files, merge, workspace

routers = [
    merge.router,
    files.router,
    workspace.router,
]

__all__ = [
    "routers",
]
