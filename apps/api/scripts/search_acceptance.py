"""
Acceptance checks for the interpret -> enrich -> compose pipeline against live providers.

Runs a handful of natural-language queries through SearchPipeline with the
configured OpenAI and RocketReach keys and reports what came back. Nothing is
written to the database.

Run from apps/api:
  cd apps/api && python scripts/search_acceptance.py

Requires: OPENAI_API_KEY. Without ROCKETREACH_API_KEY the enrichment stage
returns mock contacts, which still exercises interpretation and composition.
"""
import asyncio
import logging
import sys
from pathlib import Path

_app_api = Path(__file__).resolve().parent.parent
if str(_app_api) not in sys.path:
    sys.path.insert(0, str(_app_api))

from leadfinder.core import get_settings
from leadfinder.services import PipelineError, build_search_pipeline

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

QUERIES = [
    "Find real estate agents in Dubai",
    "Tech recruiters in London",
    "Marketing agency founders in NYC",
]


async def run_acceptance() -> int:
    settings = get_settings()
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; skipping.")
        return 0
    pipeline = build_search_pipeline(settings)

    passed = 0
    failed = 0
    for query in QUERIES:
        try:
            result = await pipeline.run(query)
        except PipelineError as e:
            logger.error("FAIL: %r failed at %s: %s", query, e.stage.value, e.message)
            failed += 1
            continue
        profiles = result.interpretation.target_profiles
        if not 1 <= len(profiles) <= 3:
            logger.error("FAIL: %r produced %d target profiles", query, len(profiles))
            failed += 1
            continue
        ids = [c.id for c in result.contacts]
        if len(ids) != len(set(ids)):
            logger.error("FAIL: %r returned duplicate contact ids", query)
            failed += 1
            continue
        logger.info(
            "PASS: %r -> %r | %d profiles, %d contacts",
            query,
            result.interpretation.interpretation,
            len(profiles),
            len(result.contacts),
        )
        for c in result.contacts[:5]:
            logger.info("    %s | %s | %s | emails=%d", c.name, c.title, c.company, len(c.emails))
        passed += 1

    logger.info("Done: %d passed, %d failed", passed, failed)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(run_acceptance()))
