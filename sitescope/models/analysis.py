from typing import Literal

from pydantic import BaseModel, Field

GMV_RANGES = (
    "< $500K",
    "$500K - $1M",
    "$1M - $5M",
    "$5M - $10M",
    "$10M - $25M",
    "$25M - $50M",
    "$50M - $100M",
    "$100M+",
)
GMV_NOT_APPLICABLE = "N/A"

GmvRange = Literal[GMV_RANGES + (GMV_NOT_APPLICABLE,)]


class DomainAnalysis(BaseModel):
    url: str = Field(
        description="The full URL that was analyzed (e.g., https://example.com). "
        "This should be the primary domain provided for analysis.",
    )
    vertical: str = Field(
        max_length=100,
        description="The primary business vertical of the website, concisely described "
        "(e.g., 'E-commerce Fashion Retail', 'SaaS Project Management'). Aim for 2-4 impactful words.",
    )
    gmv: GmvRange = Field(
        description="The estimated annual Gross Merchandise Value, as exactly one of the "
        "predefined range labels, or 'N/A' when GMV does not apply.",
    )
    products: str = Field(
        description="A summary of the main products or services offered, including typical "
        "price points, pricing tiers, or pricing strategy if observable.",
    )
    desc: str = Field(
        description="A short description (1-3 sentences) of the website's core business, "
        "value proposition, and target audience.",
    )
    country: str = Field(
        pattern=r"^[A-Z]{2}$",
        description="The two-letter ISO 3166-1 alpha-2 country code where the company is "
        "primarily based (e.g., 'US', 'GB', 'DE'). Use 'XX' if unknown or truly global.",
    )
