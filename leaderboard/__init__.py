"""Points leaderboard service."""
