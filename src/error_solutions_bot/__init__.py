"""Automation for the web-dev-error-solutions article corpus.

Provides a small CLI with:
- settings loaded from the environment or `.env`
- structured logging
- LLM article generation published as GitHub issues
- LLM-suggested organization invitations tracked in `invited_users.json`
- conversion of generated issues into `errors/` articles
"""

__version__ = "0.1.0"

from error_solutions_bot.config import BotSettings

__all__ = ["__version__", "BotSettings"]
