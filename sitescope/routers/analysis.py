from fastapi import APIRouter, Depends

from sitescope.models.analysis import DomainAnalysis
from sitescope.services import domain as domain_service
from sitescope.services.analysis import DomainAnalyzer, get_analyzer

router = APIRouter(prefix="/api", tags=["analysis"])


@router.get("/analyze-domain")
async def analyze_domain(
    domain: str | None = None,
    analyzer: DomainAnalyzer = Depends(get_analyzer),
) -> list[DomainAnalysis]:
    url = domain_service.validate_domain(domain)
    return [await analyzer.analyze(url, domain)]
