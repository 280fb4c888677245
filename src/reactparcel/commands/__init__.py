"""Click plumbing shared by the CLI: command base class and app context."""
