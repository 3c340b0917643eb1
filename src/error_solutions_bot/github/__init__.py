"""GitHub REST and PyGithub access."""
