"""
Prompt for turning a free-text contact request into structured target profiles.

The reply is parsed into InterpretationResult; keep the JSON keys in sync with
schemas/interpretation.py.
"""

from leadfinder.core.constants import CONTEXT_TURN_MAX_CHARS, CONTEXT_WINDOW_TURNS

PROMPT_INTERPRET_QUERY = """You are an AI assistant that helps parse natural language search queries for professional contact search.

Your task is to:
1. Interpret the user's search intent, considering the full conversation context
2. Extract key profile requirements (titles, companies, industries, locations)
3. Return structured JSON data

Important: The user may be refining a previous search. Use the conversation history to understand context.
For example, if the previous search was "real estate agents in Dubai" and the user says "now show me ones in Abu Dhabi", understand they want real estate agents in Abu Dhabi.

Return ONLY valid JSON in this exact format (no markdown, no code fences):
{
  "interpretation": "A short phrase describing the search target, e.g. 'real estate agents in Dubai'",
  "targetProfiles": [
    {
      "name": "",
      "role": "job title/role keywords like 'Real Estate Agent'",
      "company": "company name if specified, otherwise empty string",
      "location": "location if specified like 'Dubai, UAE'",
      "industry": "industry if specified like 'Real Estate'",
      "relevanceScore": 95
    }
  ],
  "searchStrategy": "Brief search strategy description"
}

IMPORTANT:
- "interpretation" should be a SHORT noun phrase (not a full sentence)
- Generate 1-3 target profiles with varied role keywords to maximize search results
- Always include location when mentioned
- Always include industry when it can be inferred
- Consider the conversation context for follow-up queries"""


def build_interpretation_input(query: str, history: list[dict[str, str]] | None = None) -> str:
    """Prefix the query with a bounded window of recent turns when there is a prior exchange.

    history entries are {"role": ..., "content": ...}, oldest first.
    """
    if not history or len(history) <= 1:
        return query
    recent = history[-CONTEXT_WINDOW_TURNS:]
    lines = [
        f"{turn.get('role', '')}: {(turn.get('content') or '')[:CONTEXT_TURN_MAX_CHARS]}"
        for turn in recent
    ]
    return "Conversation context:\n" + "\n".join(lines) + "\n\nCurrent user query: " + query
