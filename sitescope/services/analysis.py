"""Domain analysis: prompt the model, validate its answer, classify failures."""

from typing import Protocol

from loguru import logger

from sitescope.config import get_settings
from sitescope.exceptions import AnalysisError, ConfigurationError, UnknownAnalysisError, safe_str
from sitescope.models.analysis import DomainAnalysis
from sitescope.services.perplexity import ModelT, PerplexityClient
from sitescope.services.prompts import build_prompt

MISSING_KEY_MESSAGE = "Server configuration error: Perplexity API key is missing or empty."


class StructuredGenerator(Protocol):
    async def generate_object(
        self, prompt: str, schema: type[ModelT], *, model: str, temperature: float = 0.2
    ) -> ModelT: ...


class DomainAnalyzer:
    def __init__(
        self,
        api_key: str,
        model: str,
        temperature: float = 0.2,
        client: StructuredGenerator | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.client = client or PerplexityClient(api_key)

    def _check_configured(self) -> None:
        if not self.api_key or not self.api_key.strip():
            logger.error("PERPLEXITY_API_KEY is not set or is empty in the environment.")
            raise ConfigurationError(MISSING_KEY_MESSAGE)

    async def analyze(self, url: str, domain: str) -> DomainAnalysis:
        """Analyze one website and return its business summary.

        Raises ConfigurationError before any network call when the key is blank.
        Known call failures propagate as-is; anything else becomes
        UnknownAnalysisError so callers only deal with AnalysisError.
        """
        self._check_configured()
        logger.info("Analyzing {} with {}", url, self.model)
        try:
            prompt = build_prompt(domain, url)
            result = await self.client.generate_object(
                prompt, DomainAnalysis, model=self.model, temperature=self.temperature
            )
        except AnalysisError as e:
            logger.error("Analysis of {} failed ({}): {}", url, e.code, e.message)
            raise
        except Exception as e:
            logger.exception("Unexpected error analyzing {}", url)
            raise UnknownAnalysisError(safe_str(e), e) from e
        logger.info("Analysis of {} complete: vertical={!r} gmv={!r}", url, result.vertical, result.gmv)
        return result


def get_analyzer() -> DomainAnalyzer:
    settings = get_settings()
    client = PerplexityClient(
        settings.perplexity_api_key,
        base_url=settings.perplexity_base_url,
        timeout=settings.perplexity_timeout,
    )
    return DomainAnalyzer(
        settings.perplexity_api_key,
        model=settings.perplexity_model,
        temperature=settings.perplexity_temperature,
        client=client,
    )
