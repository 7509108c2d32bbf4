from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str


class AnalysisErrorResponse(BaseModel):
    error: str = "Error processing your request."
    details: str
    debug_info: dict = Field(serialization_alias="debugInfo")


class PerplexityStatus(BaseModel):
    configured: bool
    model: str


class StatusResponse(BaseModel):
    perplexity: PerplexityStatus
