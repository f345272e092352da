"""talentmatch - weighted candidate match scoring and ranking."""

__version__ = "1.0.0"
