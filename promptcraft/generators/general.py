"""Explanation, brainstorming, image and catch-all templates."""

from ..engine.models import Length, RequestType
from .base import GenerationContext, LengthScale, PromptGenerator, bullets


class ExplanationGenerator(PromptGenerator):
    request_type = RequestType.EXPLANATION
    length_scale = LengthScale("words", (300, 500), (700, 1000), (1500, 2000))

    def build(self, context: GenerationContext) -> str:
        return "\n\n".join(
            [
                "You are an expert educator who explains complex ideas clearly, "
                "using analogies and progressive depth.",
                f"Explain {context.subject} comprehensively but accessibly "
                f"(approximately {self.target(context)}).",
                "**1. SIMPLE DEFINITION (ELI5):**\nOne sentence plus an everyday analogy",
                "**2. HOW IT WORKS:**\nStep-by-step breakdown; describe a diagram where helpful",
                "**3. REAL-WORLD EXAMPLES:**\n"
                + bullets(["Basic example", "Intermediate example", "Advanced application"]),
                "**4. COMMON MISCONCEPTIONS:**\nWhat people often misunderstand and why",
                "**5. KEY TAKEAWAYS:**\n3-5 essential points to remember",
                "**6. DEEPER LEARNING:**\nResources and next topics for further exploration",
            ]
        )


class BrainstormingGenerator(PromptGenerator):
    """Ideas grouped into quick wins, innovative approaches and moonshots."""

    request_type = RequestType.BRAINSTORMING
    length_scale = LengthScale("ideas", (8, 10), (15, 20), (25, 30))

    def build(self, context: GenerationContext) -> str:
        low, high = self.length_scale.bounds(context.length)
        moonshots = max(2, low // 5)
        return "\n\n".join(
            [
                "You are a creative strategist and innovation consultant.",
                f"Generate innovative solutions for: {context.subject}",
                f"**IDEATION FRAMEWORK:**\nGenerate {low}-{high} ideas organized by feasibility.",
                "**QUICK WINS:**\nImplementable in days or weeks, low resource requirement\n"
                "Format: Idea | Execution Steps | Expected Impact",
                "**INNOVATIVE APPROACHES:**\nModerate effort, creative solutions\n"
                "Format: Concept | Requirements | Potential Value",
                f"**MOONSHOT IDEAS (at least {moonshots}):**\n"
                "Ambitious, transformative possibilities\n"
                "Format: Vision | Key Challenges | Long-term Potential",
                "**CREATIVE TECHNIQUES TO APPLY:**\n"
                + bullets(
                    [
                        "SCAMPER (Substitute, Combine, Adapt, Modify, Put to other use, "
                        "Eliminate, Reverse)",
                        "First principles thinking",
                        "Analogies from other industries",
                        "Constraint removal",
                    ]
                ),
                "Finish by recommending the top 3 ideas and the first step for each.",
            ]
        )


class ImageGenerationGenerator(PromptGenerator):
    request_type = RequestType.IMAGE_GENERATION
    length_scale = LengthScale("prompt variations", (1, 2), (3, 4), (5, 6))

    def build(self, context: GenerationContext) -> str:
        return "\n\n".join(
            [
                "You are an expert prompt writer for text-to-image models "
                "(Midjourney, DALL-E, Stable Diffusion).",
                f"Create {self.target(context)} for an image of: {context.subject}",
                "**EACH PROMPT MUST SPECIFY:**\n"
                + bullets(
                    [
                        "Subject: who or what, with distinguishing details",
                        "Composition: framing, camera angle, focal length",
                        "Lighting: source, direction, time of day",
                        "Style: medium or artistic reference (photo, oil painting, 3D render)",
                        "Color palette and mood",
                        "Background and environment",
                    ]
                ),
                "**QUALITY MODIFIERS:**\nResolution and detail cues appropriate to the model; "
                "aspect ratio suggestion",
                "**NEGATIVE PROMPT:**\nList elements to exclude (artifacts, extra limbs, text, "
                "watermarks)",
            ]
        )


_GENERAL_DEPTH = {
    Length.CONCISE: "Keep the response tight and focused.",
    Length.BALANCED: "Provide a well-structured response with clear examples where appropriate.",
    Length.DETAILED: "Provide a comprehensive response with analysis, examples, step-by-step "
    "instructions and potential challenges.",
}


class GeneralGenerator(PromptGenerator):
    """Catch-all template used when no other rule matches."""

    request_type = RequestType.GENERAL
    length_scale = LengthScale("words", (200, 400), (500, 800), (1000, 1500))

    def build(self, context: GenerationContext) -> str:
        return "\n\n".join(
            [
                "You are a knowledgeable expert. Answer with accuracy, clarity and "
                "practical insight.",
                f"Provide a comprehensive, expert-level response to: {context.subject}",
                f"Target length: approximately {self.target(context)}. "
                f"{_GENERAL_DEPTH[context.length]}",
                "**RESPONSE FRAMEWORK:**\n"
                "1. **Direct Answer**: address the core question clearly and concisely\n"
                "2. **Context & Background**: relevant background information\n"
                "3. **Detailed Explanation**: in-depth coverage with examples\n"
                "4. **Practical Application**: how to use this information\n"
                "5. **Additional Considerations**: related points, caveats or alternatives\n"
                "6. **Summary**: key takeaways in bullet points",
                "Organize the response with clear headings and bullet points for readability.",
            ]
        )
