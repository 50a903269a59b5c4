"""Monthly emoji usage ranking for a Slack workspace."""

__version__ = "0.1.0"
