"""User-facing text and next-step suggestions for a finished search."""

from leadfinder.schemas.contact import Contact
from leadfinder.schemas.interpretation import InterpretationResult

RESULT_ACTIONS = [
    "Send follow-up to all",
    "Save all contacts",
    "Refine search",
    "Export contacts",
]
EMPTY_ACTIONS = ["Try a different search", "Broaden your criteria"]
ERROR_ACTIONS = ["Try again", "Rephrase your search"]


def format_results(result: InterpretationResult, contacts: list[Contact]) -> str:
    count = len(contacts)
    if count == 0:
        return (
            f'I searched for "{result.interpretation}" but couldn\'t find any matching '
            "professionals at the moment. Try refining your search with more specific "
            "criteria, or ask me to look in a different location or industry."
        )
    noun = "professional" if count == 1 else "professionals"
    return (
        f'I found {count} {noun} matching "{result.interpretation}". '
        "Here are the results with verified contact information:"
    )


def suggested_actions(contacts: list[Contact]) -> list[str]:
    return list(RESULT_ACTIONS) if contacts else list(EMPTY_ACTIONS)


def format_error(reason: str) -> str:
    reason = (reason or "something went wrong").rstrip(".")
    return (
        f"I encountered an issue while searching: {reason}. "
        "Please try again or rephrase your request."
    )
