"""External process integrations (git, hooks, toolchain validation)."""
