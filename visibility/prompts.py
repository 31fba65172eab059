"""
Prompt templates for the knowledge self-assessment query.
"""

from models import Business


SYSTEM_PROMPT = (
    "You are an AI knowledge assessment tool. When asked about a business, "
    "provide a JSON response with: mentioned (boolean), mention_count (number 0-10), "
    "knowledge_level (None/Low/Medium/High), facts_known (array of facts), "
    "confidence (0-100). Be honest - if you don't know the business, say so."
)

QUERY_PROMPT = """What do you know about "{name}"{in_location}?

Business Details:
- Name: {name}
- Type: {type}
- Location: {location}
{website_line}
Please assess your knowledge of this business and respond with JSON containing:
1. mentioned: true if you have any information about this specific business
2. mention_count: how many distinct facts/mentions you have (0-10)
3. knowledge_level: your knowledge level (None/Low/Medium/High)
4. facts_known: array of specific facts you know about this business
5. confidence: your confidence in this assessment (0-100)

If you don't know this specific business, be honest and return mentioned: false."""


def build_query_prompt(business: Business) -> str:
    """Render the user prompt for one business."""
    location = business.location_label
    return QUERY_PROMPT.format(
        name=business.name,
        in_location=f" in {location}" if location else "",
        type=business.type or "Unknown",
        location=location or "Unknown",
        website_line=f"- Website: {business.website}\n" if business.website else "",
    )
