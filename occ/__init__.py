"""oc-context-cleaner - trim tool-call bloat from agent session transcripts."""

__version__ = "0.1.0"
__logo__ = "🧹"
