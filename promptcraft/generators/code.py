"""Code-writing and debugging templates."""

from ..engine.lexicon import LANGUAGE_FENCES
from ..engine.models import DetailLevel, RequestType
from .base import GenerationContext, LengthScale, PromptGenerator, bullets

_ANY_LANGUAGE = "the most appropriate language"


def _skeleton(language: str, fence: str) -> str:
    if fence == "python":
        body = (
            "def solve(data):\n"
            '    """Describe inputs, outputs and raised exceptions."""\n'
            "    ...\n\n\n"
            "def test_solve_handles_empty_input():\n"
            "    ..."
        )
    elif fence in ("javascript", "typescript"):
        body = (
            "export function solve(data) {\n"
            "  // validate input, then implement\n"
            "}\n\n"
            "test('solve handles empty input', () => {\n"
            "  // ...\n"
            "});"
        )
    else:
        body = f"// {language}: public entry point, helpers, and unit tests"
    return f"```{fence}\n{body}\n```"


class CodeWritingGenerator(PromptGenerator):
    request_type = RequestType.CODE_WRITING
    length_scale = LengthScale("test cases", (3, 5), (6, 10), (12, 15))

    def build(self, context: GenerationContext) -> str:
        language = context.detail("language") or _ANY_LANGUAGE
        fence = LANGUAGE_FENCES.get(language, "")

        sections = [
            "You are a senior software engineer who writes clean, well-tested, "
            "production-quality code.",
            f"Implement a production-quality solution for: {context.subject}",
            "**CODE STANDARDS:**\n"
            + bullets(
                [
                    f"Language: {language}",
                    f"Style: Follow {language} best practices and idioms",
                    "Principles: SOLID, DRY and clean code",
                    "Documentation: docstrings/comments for public APIs",
                ]
            ),
            "**SOLUTION STRUCTURE:**\n"
            "A. **Problem Analysis**: restate the problem, list edge cases and the approach\n"
            "B. **Implementation**: complete, runnable code with clear naming, input "
            "validation and error handling\n"
            "C. **Usage Examples**: practical usage scenarios\n"
            "D. **Complexity Analysis**: time and space complexity\n"
            f"E. **Testing**: {self.target(context)} covering normal, edge and error cases\n"
            "F. **Alternative Approaches**: briefly discuss trade-offs",
        ]

        if context.options.detail_level is DetailLevel.FULL_CODE:
            sections.append(
                "**EXPECTED SHAPE:**\n" + _skeleton(language, fence or "text")
            )
        else:
            sections.append(
                "**DESIGN FIRST:**\n"
                "Describe the module layout, public interfaces and data structures before "
                "writing code; include code only where it clarifies the design."
            )

        sections.append(
            "**QUALITY CHECKLIST:**\n"
            + bullets(
                [
                    "Code compiles/runs without errors",
                    "Handles edge cases gracefully",
                    "Efficient time/space complexity",
                    "Well-documented",
                    "Follows language conventions",
                ],
                marker="□",
            )
        )
        return "\n\n".join(sections)


class DebuggingGenerator(PromptGenerator):
    """Structured diagnose, fix and prevent template."""

    request_type = RequestType.DEBUGGING
    length_scale = LengthScale("candidate causes", (2, 3), (3, 5), (5, 7))

    def build(self, context: GenerationContext) -> str:
        language = context.detail("language")
        stack_line = f"Technology: {language}\n" if language else ""

        if context.options.detail_level is DetailLevel.FULL_CODE:
            solution = bullets(
                [
                    "Explain the root cause in one or two sentences",
                    "Provide the corrected code as a complete, copy-pasteable snippet",
                    "Show a before/after diff of the changed lines",
                    "Explain why the fix works",
                ]
            )
        else:
            solution = bullets(
                [
                    "Explain the root cause in one or two sentences",
                    "Describe the fix and which components it touches",
                    "Explain why the fix works",
                ]
            )

        return "\n\n".join(
            [
                "You are an expert debugger and software engineer with deep experience "
                "diagnosing production incidents.",
                f"Diagnose and fix the following issue: {context.subject}\n{stack_line}".rstrip(),
                "**1. PROBLEM ANALYSIS:**\n"
                + bullets(
                    [
                        "Reproduce the issue with minimal steps",
                        "Identify expected vs. actual behavior",
                        "Isolate the scope (which component/function?)",
                    ]
                ),
                "**2. ROOT CAUSE INVESTIGATION:**\n"
                + bullets(
                    [
                        f"List the {self.target(context)} ranked by likelihood",
                        "Examine error messages, status codes and stack traces",
                        "Check recent changes and configuration",
                        "Trace the data flow through related code paths",
                    ]
                ),
                f"**3. SOLUTION (THE FIX):**\n{solution}",
                "**4. VERIFICATION:**\n"
                + bullets(
                    [
                        "Test cases that confirm the fix",
                        "Regression tests that would have caught the bug",
                    ]
                ),
                "**5. PREVENTION:**\n"
                + bullets(
                    [
                        "Recommendations to avoid similar issues",
                        "Monitoring or alerting that would surface it earlier",
                        "Code improvements or best practices",
                    ]
                ),
            ]
        )
