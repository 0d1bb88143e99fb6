"""Shared API constants."""

# List endpoints (conversations, search history) return at most this many rows
LIST_LIMIT = 50

# Conversation title is derived from the first user message
TITLE_MAX_LENGTH = 60
DEFAULT_CONVERSATION_TITLE = "New Conversation"

# Conversation list preview of the last message
LAST_MESSAGE_PREVIEW_LENGTH = 100

# Context window handed to the interpretation model on follow-up turns
CONTEXT_WINDOW_TURNS = 6
CONTEXT_TURN_MAX_CHARS = 200

# Interpretation output is capped to this many target profiles
MAX_TARGET_PROFILES = 3

# Relevance defaults for contacts without a provider/AI score
PROVIDER_DEFAULT_RELEVANCE = 90
MOCK_DEFAULT_RELEVANCE = 90
FALLBACK_DEFAULT_RELEVANCE = 50
