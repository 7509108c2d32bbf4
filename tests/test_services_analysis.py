import pytest

from sitescope.exceptions import (
    ConfigurationError,
    SchemaValidationError,
    UnknownAnalysisError,
    UpstreamError,
)
from sitescope.models.analysis import DomainAnalysis
from sitescope.services import analysis as analysis_service
from sitescope.services.analysis import DomainAnalyzer
from conftest import ANALYSIS_RESULT, FakeGenerator

SAMPLE_RESULT = DomainAnalysis.model_validate(ANALYSIS_RESULT)


def _analyzer(api_key="pplx-test", **kwargs) -> DomainAnalyzer:
    generator = FakeGenerator(**kwargs)
    return DomainAnalyzer(api_key, model="sonar-pro", client=generator)


@pytest.mark.asyncio
class TestAnalyze:
    async def test_returns_result(self):
        analyzer = _analyzer(result=SAMPLE_RESULT)
        result = await analyzer.analyze("https://example.com", "example.com")
        assert result is SAMPLE_RESULT

    async def test_calls_model_once_with_schema(self):
        analyzer = _analyzer(result=SAMPLE_RESULT)
        await analyzer.analyze("https://example.com", "example.com")
        assert len(analyzer.client.calls) == 1
        call = analyzer.client.calls[0]
        assert call["schema"] is DomainAnalysis
        assert call["model"] == "sonar-pro"
        assert call["temperature"] == 0.2
        assert "https://example.com" in call["prompt"]

    async def test_custom_temperature(self):
        generator = FakeGenerator(result=SAMPLE_RESULT)
        analyzer = DomainAnalyzer("pplx-test", model="sonar", temperature=0.5, client=generator)
        await analyzer.analyze("https://example.com", "example.com")
        assert generator.calls[0]["temperature"] == 0.5


@pytest.mark.asyncio
class TestConfiguration:
    @pytest.mark.parametrize("api_key", ["", "   ", None])
    async def test_blank_key_raises_before_call(self, api_key):
        analyzer = _analyzer(api_key=api_key, result=SAMPLE_RESULT)
        with pytest.raises(ConfigurationError, match="Perplexity API key is missing or empty"):
            await analyzer.analyze("https://example.com", "example.com")
        assert analyzer.client.calls == []


@pytest.mark.asyncio
class TestFailures:
    async def test_schema_error_propagates(self):
        error = SchemaValidationError("Model output is not valid JSON", raw_text="nope")
        analyzer = _analyzer(error=error)
        with pytest.raises(SchemaValidationError) as exc_info:
            await analyzer.analyze("https://example.com", "example.com")
        assert exc_info.value is error

    async def test_upstream_error_propagates(self):
        error = UpstreamError("Perplexity API error (500)", status_code=500)
        analyzer = _analyzer(error=error)
        with pytest.raises(UpstreamError):
            await analyzer.analyze("https://example.com", "example.com")

    async def test_unexpected_error_is_wrapped(self):
        cause = RuntimeError("boom")
        analyzer = _analyzer(error=cause)
        with pytest.raises(UnknownAnalysisError) as exc_info:
            await analyzer.analyze("https://example.com", "example.com")
        info = exc_info.value.debug_info()
        assert info["rawErrorType"] == "unknown"
        assert info["name"] == "RuntimeError"
        assert info["message"] == "boom"
        assert exc_info.value.error is cause
        assert "cause" not in info

    async def test_unprintable_error_falls_back(self):
        class Unprintable(Exception):
            def __str__(self):
                raise TypeError("cannot render")

        analyzer = _analyzer(error=Unprintable())
        with pytest.raises(UnknownAnalysisError) as exc_info:
            await analyzer.analyze("https://example.com", "example.com")
        assert exc_info.value.details() == "An unexpected and non-serializable issue occurred."
        assert exc_info.value.debug_info()["name"] == "Unprintable"
        assert "cause" not in exc_info.value.debug_info()

    async def test_chained_cause_is_reported(self):
        try:
            raise RuntimeError("outer") from OSError("inner dns failure")
        except RuntimeError as e:
            error = e
        analyzer = _analyzer(error=error)
        with pytest.raises(UnknownAnalysisError) as exc_info:
            await analyzer.analyze("https://example.com", "example.com")
        info = exc_info.value.debug_info()
        assert info["name"] == "RuntimeError"
        assert info["message"] == "outer"
        assert info["cause"] == "inner dns failure"

    async def test_prompt_failure_is_wrapped(self, mocker):
        mocker.patch.object(analysis_service, "build_prompt", side_effect=KeyError("template"))
        analyzer = _analyzer(result=SAMPLE_RESULT)
        with pytest.raises(UnknownAnalysisError) as exc_info:
            await analyzer.analyze("https://example.com", "example.com")
        assert exc_info.value.name == "KeyError"
        assert analyzer.client.calls == []


class TestGetAnalyzer:
    def test_builds_from_settings(self, mocker):
        settings = mocker.patch.object(analysis_service, "get_settings").return_value
        settings.perplexity_api_key = "pplx-env"
        settings.perplexity_model = "sonar"
        settings.perplexity_temperature = 0.2
        settings.perplexity_base_url = "https://api.perplexity.ai"
        settings.perplexity_timeout = 30.0
        analyzer = analysis_service.get_analyzer()
        assert analyzer.api_key == "pplx-env"
        assert analyzer.model == "sonar"
        assert analyzer.client.timeout == 30.0


class TestDebugInfo:
    def test_empty_message_is_kept(self):
        info = UpstreamError("").debug_info()
        assert info["message"] == ""

    def test_empty_message_details(self):
        assert UpstreamError("").details() == "An error occurred: "
