"""Error articles written from GitHub issues."""
