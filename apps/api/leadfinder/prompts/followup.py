"""Prompts for drafting follow-up messages to a contact, one variant per channel."""

_BASE = """You are a professional communication assistant that helps craft follow-up messages.
Write natural, personalized, and professional messages that feel human and authentic."""

_CHANNEL_RULES = {
    "EMAIL": """For EMAIL messages:
- Include a subject line
- Use proper email formatting
- Be concise but professional
- Include a clear call-to-action

Return JSON format:
{
  "subject": "Email subject line",
  "body": "Email body text"
}""",
    "WHATSAPP": """For WHATSAPP messages:
- Keep it casual but professional
- Use shorter paragraphs
- Be friendly and direct
- Avoid overly formal language

Return JSON format:
{
  "body": "WhatsApp message text"
}""",
    "SMS": """For SMS messages:
- Keep it very brief (160 characters or less if possible)
- Be direct and clear
- Include your name
- Make it action-oriented

Return JSON format:
{
  "body": "SMS message text"
}""",
}


def get_followup_instructions(channel: str) -> str:
    return f"{_BASE}\n\n{_CHANNEL_RULES[channel]}"


def get_followup_input(
    channel: str,
    context: str,
    name: str,
    title: str | None = None,
    company: str | None = None,
) -> str:
    return f"""Generate a {channel.lower()} message to follow up with:

Contact Details:
- Name: {name}
- Title: {title or 'N/A'}
- Company: {company or 'N/A'}

Context/Purpose: {context}

Create a personalized, professional message appropriate for this channel."""
