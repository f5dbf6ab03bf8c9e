from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from business_tools.schemas.inputs import MessagingRequest, SwotRequest

NOT_SPECIFIED = "Not specified"
DEFAULT_TONE = "Professional and engaging"

JSON_ONLY = "Ensure the response is valid JSON only, with no additional text or formatting."

SWOT_SYSTEM = (
    "You are a strategic business analyst with deep expertise in competitive analysis "
    "and market research. Provide thorough, accurate, and actionable SWOT analyses "
    "based on current market information."
)

MESSAGING_SYSTEM = (
    "You are an expert marketing strategist and copywriter with extensive experience in "
    "product positioning, messaging frameworks, and brand communication. Create "
    "compelling, strategic messaging that converts prospects into customers."
)

# Messaging is more generative than SWOT: longer output, higher temperature.
SWOT_MAX_TOKENS = 2000
SWOT_TEMPERATURE = 0.7
MESSAGING_MAX_TOKENS = 3000
MESSAGING_TEMPERATURE = 0.8


@dataclass(frozen=True)
class PromptSpec:
    system: str
    user: str
    max_tokens: int
    temperature: float


def _or_default(value: Optional[str], default: str = NOT_SPECIFIED) -> str:
    return value if value else default


def _example(shape: Dict[str, Any]) -> str:
    return json.dumps(shape, indent=2, ensure_ascii=False)


def _swot_shape(company: str, industry: str) -> Dict[str, Any]:
    return {
        "company": company,
        "industry": industry,
        "analysis": {
            "strengths": [{"point": "Strength title", "description": "Detailed explanation"}],
            "weaknesses": [{"point": "Weakness title", "description": "Detailed explanation"}],
            "opportunities": [{"point": "Opportunity title", "description": "Detailed explanation"}],
            "threats": [{"point": "Threat title", "description": "Detailed explanation"}],
        },
        "keyInsights": [
            "Most critical insight",
            "Second most important insight",
            "Third key strategic point",
        ],
        "recommendations": [
            "Primary strategic recommendation",
            "Secondary recommendation",
            "Risk mitigation suggestion",
        ],
    }


def _pillar_shape(n: int) -> Dict[str, Any]:
    return {
        "pillarName": f"Pillar {n} Name",
        "painPoints": [
            "Pain point this pillar solves #1",
            "Pain point this pillar solves #2",
        ],
        "benefits": ["Benefit #1", "Benefit #2", "Benefit #3"],
        "featureDetails": ["Feature detail #1", "Feature detail #2", "Feature detail #3"],
        "proofPoint": "Real-life case study example showing results",
    }


def _messaging_shape(company: str, product: str, industry: str) -> Dict[str, Any]:
    return {
        "company": company,
        "product": product,
        "industry": industry,
        "valueProposition": "10-15 word clear value statement",
        "targetAudience": {
            "profile": (
                "Brief persona description including personality, responsibilities, "
                "title, role in buying process"
            ),
        },
        "elevatorPitch": "1-2 sentences incorporating value proposition and target market",
        "longDescription": (
            "100-200 words including value points, features, benefits, target market, "
            "proof points"
        ),
        "toneOfVoice": {
            "adjectives": ["adjective1", "adjective2", "adjective3", "adjective4"],
            "beforeExample": "Example of how NOT to communicate",
            "afterExample": "Example of ideal communication style",
        },
        "outcomes": [f"Specific outcome #{i}" for i in range(1, 6)],
        "customerRequirements": [
            "Crucial requirement #1 for conversion",
            "Crucial requirement #2 for conversion",
        ],
        "outcomePillars": [_pillar_shape(i) for i in range(1, 4)],
    }


def build_swot_prompt(req: SwotRequest) -> PromptSpec:
    subject = req.company
    if req.industry:
        subject += f" in the {req.industry} industry"
    if req.additional_context:
        subject += f". Additional context: {req.additional_context}"

    user = f"""
Conduct a comprehensive SWOT analysis for {subject}.

Please provide a detailed SWOT analysis with:
- 4-6 key points for each category (Strengths, Weaknesses, Opportunities, Threats)
- Specific, actionable insights rather than generic statements
- Current market context and recent developments
- Focus on strategic implications

Format your response as a JSON object with this exact structure:
{_example(_swot_shape(req.company, _or_default(req.industry)))}

{JSON_ONLY}"""

    return PromptSpec(
        system=SWOT_SYSTEM,
        user=user,
        max_tokens=SWOT_MAX_TOKENS,
        temperature=SWOT_TEMPERATURE,
    )


def build_messaging_prompt(req: MessagingRequest) -> PromptSpec:
    subject = f"{req.company}'s {req.product}"
    if req.industry:
        subject += f" in the {req.industry} industry"

    user = f"""
Create a comprehensive product messaging framework for {subject}.

Company Details:
- Company: {req.company}
- Product/Service: {req.product}
- Target Audience: {_or_default(req.target_audience)}
- Key Features: {_or_default(req.key_features)}
- Main Competitors: {_or_default(req.competitors)}
- Business Goals: {_or_default(req.business_goals)}
- Preferred Tone: {_or_default(req.tone_preference, DEFAULT_TONE)}

Generate a complete messaging framework that includes:

1. Value Proposition (10-15 words, clear and compelling)
2. Target Audience Profile (brief persona description)
3. Elevator Pitch (1-2 sentences incorporating value prop)
4. Long Description (100-200 words with benefits, features, proof points)
5. Tone of Voice (3-4 adjectives with before/after examples)
6. Key Outcomes (3-5 bullet points)
7. Customer Requirements (2-3 crucial conversion factors)
8. Three Outcome Pillars with detailed breakdowns

Format your response as a JSON object with this exact structure:
{_example(_messaging_shape(req.company, req.product, _or_default(req.industry)))}

{JSON_ONLY} Make the messaging specific, actionable, and tailored to the provided context."""

    return PromptSpec(
        system=MESSAGING_SYSTEM,
        user=user,
        max_tokens=MESSAGING_MAX_TOKENS,
        temperature=MESSAGING_TEMPERATURE,
    )
