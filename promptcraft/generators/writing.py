"""Content and business writing templates."""

import re

from ..engine.models import RequestType, Tone
from .base import GenerationContext, LengthScale, PromptGenerator, bullets, title

_TECH_TOPIC = re.compile(r"\b(?:tech\w*|ai|software|digital|data)\b", re.IGNORECASE)

_READING_LEVEL = {
    Tone.ACADEMIC: "Graduate level, with citations where claims need support",
    Tone.TECHNICAL: "Practitioner level, precise terminology allowed",
}


class ContentWritingGenerator(PromptGenerator):
    request_type = RequestType.CONTENT_WRITING
    length_scale = LengthScale("words", (600, 800), (1000, 1500), (2000, 2500))

    def build(self, context: GenerationContext) -> str:
        topic = context.subject
        tone = context.options.tone.value
        specialty = (
            "technology and digital trends"
            if _TECH_TOPIC.search(topic)
            else "engaging, research-backed content"
        )

        return "\n\n".join(
            [
                f"You are a professional content strategist and writer specializing in {specialty}.",
                f"Write a {self.target(context)} {tone} article about: {topic}",
                "**1. HEADLINE:**\n"
                "Create an SEO-optimized, compelling title.\n"
                "Formula: [Number] + [Adjective] + [Keyword] + [Promise/Benefit]",
                "**2. OPENING (10% of word count):**\n"
                + bullets(
                    [
                        "Hook: start with a surprising fact, question, or story",
                        "Context: why this matters now",
                        "Promise: what the reader will learn",
                    ]
                ),
                "**3. BODY (75% of word count):**\n"
                "3-5 main sections with:\n"
                + bullets(
                    [
                        "H2 subheadings (keyword-rich)",
                        "Supporting data or research",
                        "Practical examples",
                        "Bullet points for scannability",
                    ]
                ),
                "**4. CONCLUSION (15% of word count):**\n"
                + bullets(
                    [
                        "Key takeaways summary",
                        "Clear call-to-action",
                        "Forward-looking statement",
                    ]
                ),
                "**5. SEO REQUIREMENTS:**\n"
                + bullets(
                    [
                        "Primary keyword in title, intro and conclusion",
                        "Related keywords naturally distributed",
                        "Meta description (155 characters)",
                        "Internal/external link suggestions",
                    ]
                ),
                "**6. WRITING STYLE:**\n"
                f"Tone: {title(tone)}\n"
                "Paragraphs: 2-4 sentences max\n"
                "Voice: Active over passive\n"
                f"Reading level: {_READING_LEVEL.get(context.options.tone, 'Grade 8-10')}",
            ]
        )


_DOCUMENT_SECTIONS = {
    "email": [
        "Subject line (under 60 characters, specific and actionable)",
        "Greeting appropriate to the relationship",
        "Purpose stated in the first sentence",
        "Supporting details in short paragraphs",
        "Clear call-to-action with any deadline",
        "Professional sign-off",
    ],
    "proposal": [
        "Executive summary",
        "Problem statement and objectives",
        "Proposed solution and approach",
        "Timeline and milestones",
        "Budget and resources",
        "Expected outcomes and next steps",
    ],
    "business plan": [
        "Executive summary",
        "Market analysis and target customers",
        "Products/services and value proposition",
        "Marketing and sales strategy",
        "Operations and team",
        "Financial projections and funding needs",
    ],
    "cover letter": [
        "Opening that names the role and a hook",
        "Two or three accomplishments matched to the job requirements",
        "Why this company specifically",
        "Confident closing with a call-to-action",
    ],
    "press release": [
        "Headline and dateline",
        "Lead paragraph answering who, what, when, where, why",
        "Supporting quote from a spokesperson",
        "Background details",
        "Boilerplate and media contact",
    ],
    "report": [
        "Executive summary",
        "Background and scope",
        "Findings with supporting data",
        "Analysis",
        "Recommendations",
    ],
    "memo": [
        "TO / FROM / DATE / SUBJECT header",
        "Purpose in the opening line",
        "Key points",
        "Required actions and owners",
    ],
    "pitch": [
        "Hook and problem",
        "Solution and unique advantage",
        "Traction or proof points",
        "The ask",
    ],
}


class BusinessWritingGenerator(PromptGenerator):
    """Business documents: emails, proposals, plans, letters and reports."""

    request_type = RequestType.BUSINESS_WRITING
    length_scale = LengthScale("words", (150, 250), (300, 500), (600, 900))

    def build(self, context: GenerationContext) -> str:
        document = context.detail("document", "business document")
        structure = _DOCUMENT_SECTIONS.get(
            document,
            ["Clear purpose", "Supporting details", "Recommended actions", "Closing"],
        )

        return "\n\n".join(
            [
                "You are an experienced business communication specialist who writes "
                "clear, persuasive documents for executives and clients.",
                f"Write a {document} (approximately {self.target(context)}) about: "
                f"{context.subject}",
                "**STRUCTURE:**\n"
                + "\n".join(f"{i}. {item}" for i, item in enumerate(structure, start=1)),
                "**AUDIENCE & PURPOSE:**\n"
                + bullets(
                    [
                        "Identify the reader and what they need to decide or do",
                        "Lead with the most important information",
                        "Anticipate and address likely objections",
                    ]
                ),
                "**STYLE REQUIREMENTS:**\n"
                + bullets(
                    [
                        "Concise sentences and plain language; no jargon without purpose",
                        "Specific numbers, dates and owners instead of vague claims",
                        "Scannable formatting (headings, short paragraphs, bullets)",
                    ]
                ),
                "**FINAL CHECK:**\n"
                + bullets(
                    [
                        "The call-to-action is unambiguous",
                        "Tone matches the relationship with the reader",
                        "No spelling or grammar errors",
                    ],
                    marker="□",
                ),
            ]
        )
