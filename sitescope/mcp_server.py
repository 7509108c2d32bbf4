from fastmcp import FastMCP

from sitescope.exceptions import (
    AnalysisError,
    ConfigurationError,
    InputError,
    SchemaValidationError,
)
from sitescope.services import domain as domain_service
from sitescope.services.analysis import get_analyzer

mcp = FastMCP("SiteScope")


def _handle_mcp_error(e: InputError | ConfigurationError | AnalysisError) -> dict:
    """Convert exceptions to agent-friendly error dicts."""
    if isinstance(e, InputError):
        return {"error": "invalid_input", "message": str(e), "action": "Pass a bare domain like 'example.com' or a full http(s) URL"}
    if isinstance(e, ConfigurationError):
        return {"error": "configuration_error", "message": str(e), "action": "Ask the operator to set PERPLEXITY_API_KEY in .env"}
    if isinstance(e, SchemaValidationError):
        return {"error": "schema_validation", "message": e.details(), "llm_output": e.raw_text}
    error = "upstream_error" if e.code == "upstream" else "unknown_error"
    return {"error": error, "message": e.details(), "debug_info": e.debug_info()}


@mcp.tool
async def analyze_domain(domain: str) -> dict:
    """Analyze the website behind a domain and return a business summary:
    vertical, annual GMV range, products and pricing, a short description, and the
    ISO country code. Accepts 'example.com', 'example.com/shop' or a full https URL."""
    try:
        url = domain_service.validate_domain(domain)
        result = await get_analyzer().analyze(url, domain)
        return {"results": [result.model_dump()], "count": 1}
    except (InputError, ConfigurationError, AnalysisError) as e:
        return _handle_mcp_error(e)
