"""
Prompt templates for the three pipeline stages.
"""
import json
import re
from typing import Any, Dict, List

from ..models.document import UNKNOWN_BN

HEADLINE_MARKER = "LARGE_TEXT:"

_HEADLINE_LINE = re.compile(rf"{re.escape(HEADLINE_MARKER)}[ \t]*([^\n]+)")


def extract_marker_headlines(text: str) -> List[str]:
    """Non-empty LARGE_TEXT lines of a raw extraction, in order."""
    return [match.strip() for match in _HEADLINE_LINE.findall(text or "") if match.strip()]


TEXT_EXTRACTION_PROMPT = f"""
Please extract ALL text from this Bengali newspaper image.
Focus on accuracy and preserving Bengali Unicode characters.

Rules:
1. Extract every visible text element
2. Preserve Bengali font and formatting
3. Use --- to separate different sections/columns
4. Use === to separate different articles
5. Identify text hierarchy (larger text = headlines, smaller text = body)
6. Don't try to structure - just extract everything you can see

Extract in this format:
{HEADLINE_MARKER} [any large/bold text you see]
MEDIUM_TEXT: [medium sized text]
SMALL_TEXT: [smaller body text]
OTHER_TEXT: [any other text elements]
"""

STRUCTURE_SCHEMA = """{
  "date": "string",
  "headlines": ["string"],
  "subHeadlines": ["string"],
  "articles": [
    {
      "headline": "string",
      "content": "string",
      "category": "string"
    }
  ],
  "allText": "string"
}"""

SUMMARY_SCHEMA = """{
  "overallSummary": "string",
  "headlineSummaries": [
    {
      "headline": "string",
      "summary": "string"
    }
  ],
  "articleSummaries": [
    {
      "headline": "string",
      "summary": "string",
      "keyPoints": ["string"],
      "category": "string"
    }
  ],
  "importantTopics": ["string"]
}"""

_STRUCTURE_TEMPLATE = """
Based on the following extracted text from a Bengali newspaper, identify and structure the content.
You must respond with only a valid JSON object. Do not include any other text or markdown.

EXTRACTED TEXT:
{extracted_text}

Use "{unknown}" for any unknown values.
The JSON schema you must follow is:
{schema}
"""

_SUMMARY_TEMPLATE = """
Create a summary for this Bengali newspaper content. You must respond with only a valid JSON object.
Do not include any other text or markdown.

DATA: {data}

The JSON schema you must follow is:
{schema}
"""


def build_structure_prompt(extracted_text: str) -> str:
    return _STRUCTURE_TEMPLATE.format(
        extracted_text=extracted_text,
        unknown=UNKNOWN_BN,
        schema=STRUCTURE_SCHEMA,
    )


def build_summary_prompt(data: Dict[str, Any]) -> str:
    return _SUMMARY_TEMPLATE.format(
        data=json.dumps(data, ensure_ascii=False),
        schema=SUMMARY_SCHEMA,
    )
