"""Prompt text for the domain analysis call."""

from sitescope.models.analysis import GMV_NOT_APPLICABLE, GMV_RANGES

BUSINESS_MODELS = "D2C (Direct-to-Consumer), Marketplace, Subscription, Service-based, Info-product, B2C"


def _gmv_range_list(indent: str) -> str:
    return "\n".join(f'{indent}-   "{label}"' for label in GMV_RANGES)


def build_prompt(domain: str, url: str) -> str:
    """Build the instruction prompt for analyzing ``url``.

    The GMV section walks the model through a fixed reasoning procedure and
    requires it to emit only the selected range label in the ``gmv`` field.
    """
    ranges = _gmv_range_list(" " * 12)
    return f"""You are an expert business analyst. Your task is to analyze the website associated with the domain: {domain} and provide a structured JSON output as described below.
The specific URL to focus your analysis on is: {url}.

Your response MUST be a valid JSON object adhering to the provided schema.
For each field in the JSON, provide values of the correct type as specified in the schema. String values should NOT include any markdown formatting or unescaped special characters. All strings must be properly JSON escaped.

Please provide the following information in the JSON object:

1.  **url**: Plain string. The exact URL that was analyzed: '{url}'.

2.  **vertical**: Plain string. Identify the primary business vertical. Be concise and impactful, using 2-4 words.

3.  **gmv**: For this field, you will act as an expert E-commerce Business Intelligence Analyst. Your sole purpose is to analyze the homepage of the given domain and determine its annual Gross Merchandise Value (GMV) by placing it into a predefined category.
    You must follow these steps meticulously in your internal reasoning:
    1.  **Initial Scan & Business Model Identification:**
        -   Access and parse the content of the provided URL ({url}).
        -   First, determine the business model. Classify it as one of: [{BUSINESS_MODELS}].
        -   Look for any explicit mentions of financial figures, customer counts, or order volumes.
    2.  **Product & Pricing Analysis:**
        -   Scan the homepage for an estimated number of products or SKUs. If not present, note it internally.
        -   Identify 3-5 representative products featured. Extract names and prices. Calculate an Average Product Price (APP). Note currency.
    3.  **Proxy Data Extraction:**
        -   **Social Proof:** Find customer numbers, community size, total items sold.
        -   **Review Data:** Look for total review counts.
        -   **Scale Indicators:** Note physical stores, team size, years in business, press/investors.
    4.  **Synthesis & GMV Range Selection:**
        -   Based on all gathered information, synthesize your findings.
        -   Select the single most appropriate annual GMV range from the **mandatory list** below.
            **Predefined GMV Ranges:**
{ranges}
    After performing this detailed analysis and selecting a range, the value for the 'gmv' field in the final JSON output MUST BE ONLY the selected GMV range string (e.g., "{GMV_RANGES[2]}"). Do NOT include confidence scores, reasoning, or any other text in this specific 'gmv' field's string value. If GMV is not applicable, the value should be '{GMV_NOT_APPLICABLE}'.

4.  **products**: Plain string. Summarize key products/services, typical price points, pricing models, or observed pricing strategy.

5.  **desc**: Plain string. Write a brief (1-3 sentences) description of the website's core business, value proposition, and target audience.

6.  **country**: Plain string. Determine the two-letter ISO 3166-1 alpha-2 country code where the company is primarily based or headquartered (e.g., 'US' for United States, 'GB' for United Kingdom, 'DE' for Germany). If the primary country of operation is unclear or the company is truly global without a distinct headquarters for its main operations, use 'XX'.
"""
