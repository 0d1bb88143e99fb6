"""Search pipeline: interpret -> enrich -> compose.

Stages run strictly in sequence for one request. Interpretation failures are
raised as PipelineError(stage=INTERPRET); enrichment degrades internally and
only raises for unexpected errors. Callers decide whether a PipelineError
becomes an assistant turn (conversations) or an HTTP error (single-shot search).
"""

import logging
from dataclasses import dataclass, field

from leadfinder.core.config import Settings
from leadfinder.providers import (
    InterpretationClient,
    InterpretationError,
    get_enrichment_provider,
    get_interpretation_client,
)
from leadfinder.schemas.contact import Contact
from leadfinder.schemas.interpretation import InterpretationResult

from .composer import format_results, suggested_actions
from .enrichment import EnrichmentClient
from .errors import PipelineError, PipelineStage

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    interpretation: InterpretationResult
    contacts: list[Contact]
    message: str
    suggested_actions: list[str] = field(default_factory=list)


class SearchPipeline:
    def __init__(self, interpreter: InterpretationClient, enricher: EnrichmentClient):
        self.interpreter = interpreter
        self.enricher = enricher

    async def run(
        self,
        query: str,
        history: list[dict[str, str]] | None = None,
    ) -> PipelineResult:
        try:
            interpretation = await self.interpreter.interpret(query, history)
        except InterpretationError as e:
            raise PipelineError(PipelineStage.INTERPRET, str(e), e) from e
        except Exception as e:
            logger.exception("Pipeline interpret failed unexpectedly")
            raise PipelineError(
                PipelineStage.INTERPRET, "The AI returned a response I couldn't understand", e
            ) from e
        logger.info(
            "Pipeline interpret ok | interpretation=%r profiles=%d",
            interpretation.interpretation,
            len(interpretation.target_profiles),
        )

        try:
            contacts = await self.enricher.enrich(interpretation)
        except Exception as e:
            logger.exception("Pipeline enrich failed unexpectedly")
            raise PipelineError(PipelineStage.ENRICH, "Contact lookup failed unexpectedly", e) from e
        logger.info("Pipeline enrich ok | contacts=%d", len(contacts))

        return PipelineResult(
            interpretation=interpretation,
            contacts=contacts,
            message=format_results(interpretation, contacts),
            suggested_actions=suggested_actions(contacts),
        )


def build_search_pipeline(settings: Settings) -> SearchPipeline:
    return SearchPipeline(
        interpreter=get_interpretation_client(settings),
        enricher=EnrichmentClient(get_enrichment_provider(settings)),
    )
