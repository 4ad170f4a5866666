# tools/review.py
"""
LLM-backed authoring and review tools.

- generate_spec: write a specification from a short prompt
- review_spec: critique an existing specification
- review_code: review a diff with a chosen focus

Each tool is a prompt builder; AITool sends the prompts to the configured
provider (OpenAI or Ollama) and returns the reply verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Sequence

from ..mcp_core.errors import ToolInputError
from ..mcp_core.results import ToolResponse
from .base import AITool, respond

SpecFormat = Literal["markdown", "structured"]
ReviewType = Literal["security", "performance", "style", "logic", "all"]

REVIEW_FOCUS: dict[str, str] = {
    "security": "Security vulnerabilities, input validation, authentication/authorization issues, data exposure risks",
    "performance": "Performance bottlenecks, inefficient algorithms, memory leaks, unnecessary computations",
    "style": "Code style consistency, naming conventions, code organization, readability",
    "logic": "Business logic errors, edge cases, error handling, correctness of implementation",
    "all": "All aspects including security, performance, code style, and logic",
}


def _require(field: str, value: str | None) -> str:
    if not value or not value.strip():
        raise ToolInputError(field, f"{field} is required")
    return value


# =============================================================================
# generate_spec
# =============================================================================


@dataclass(frozen=True, slots=True)
class SpecGenerationOptions:
    prompt: str
    context: str | None = None
    format: str = "markdown"


class GenerateSpecPrompts:
    action_name = "generating specification"

    def system_prompt(self, args: SpecGenerationOptions) -> str:
        if args.format == "structured":
            style = "Output in a structured format with clear sections, requirements, and acceptance criteria."
        else:
            style = "Output in clean markdown format."
        return (
            "You are a technical specification writer. Generate detailed, clear, and actionable "
            "specifications based on the requirements provided.\n"
            f"{style}\n"
            "Focus on:\n"
            "- Clear objectives and goals\n"
            "- Detailed requirements (functional and non-functional)\n"
            "- Technical architecture and design decisions\n"
            "- Implementation approach\n"
            "- Success criteria and testing requirements\n"
            "- Edge cases and error handling"
        )

    def user_prompt(self, args: SpecGenerationOptions) -> str:
        prompt = _require("prompt", args.prompt)
        text = f"Generate a specification for: {prompt}"
        if args.context:
            text += f"\n\nAdditional context: {args.context}"
        return text


# =============================================================================
# review_spec
# =============================================================================


@dataclass(frozen=True, slots=True)
class SpecReviewOptions:
    spec: str
    focus_areas: Sequence[str] = ()


class ReviewSpecPrompts:
    action_name = "reviewing specification"

    def system_prompt(self, args: SpecReviewOptions) -> str:
        focus = ""
        if args.focus_areas:
            focus = f"\nPay special attention to these areas: {', '.join(args.focus_areas)}"
        return (
            "You are a critical technical reviewer specializing in specification analysis. "
            "Review the provided specification and provide constructive, critical feedback.\n"
            "Focus on:\n"
            "- Completeness and clarity of requirements\n"
            "- Technical feasibility and architectural soundness\n"
            "- Missing edge cases or error scenarios\n"
            "- Ambiguities that could lead to implementation issues\n"
            "- Security and performance considerations\n"
            "- Testability and success criteria clarity\n"
            f"{focus}\n\n"
            "Be direct and specific in your feedback. Point out both strengths and weaknesses."
        )

    def user_prompt(self, args: SpecReviewOptions) -> str:
        return f"Review this specification:\n\n{_require('spec', args.spec)}"


# =============================================================================
# review_code
# =============================================================================


@dataclass(frozen=True, slots=True)
class CodeReviewOptions:
    diff: str
    context: str | None = None
    review_type: str = "all"


class ReviewCodePrompts:
    action_name = "reviewing code"

    def system_prompt(self, args: CodeReviewOptions) -> str:
        if args.review_type not in REVIEW_FOCUS:
            raise ToolInputError(
                "review_type",
                f"Unknown review type: {args.review_type}. Expected one of: {', '.join(REVIEW_FOCUS)}",
            )
        return (
            "You are an expert code reviewer. Review the provided code changes critically "
            "and provide actionable feedback.\n"
            f"Focus on: {REVIEW_FOCUS[args.review_type]}\n\n"
            "Provide:\n"
            "- Specific line-by-line feedback where issues are found\n"
            "- Severity level for each issue (critical, major, minor)\n"
            "- Concrete suggestions for improvement\n"
            "- Recognition of good practices when present\n\n"
            "Be constructive but thorough in identifying potential issues."
        )

    def user_prompt(self, args: CodeReviewOptions) -> str:
        text = f"Review these code changes:\n\n{_require('diff', args.diff)}"
        if args.context:
            text += f"\n\nContext: {args.context}"
        return text


_generate_spec_tool: AITool[SpecGenerationOptions] = AITool(GenerateSpecPrompts())
_review_spec_tool: AITool[SpecReviewOptions] = AITool(ReviewSpecPrompts())
_review_code_tool: AITool[CodeReviewOptions] = AITool(ReviewCodePrompts())


async def generate_spec(args: SpecGenerationOptions) -> ToolResponse:
    return await _generate_spec_tool.execute(args)


async def review_spec(args: SpecReviewOptions) -> ToolResponse:
    return await _review_spec_tool.execute(args)


async def review_code(args: CodeReviewOptions) -> ToolResponse:
    return await _review_code_tool.execute(args)


def register_review_tools(mcp: Any) -> None:
    """Register the LLM-backed tools with the MCP server."""

    @mcp.tool(name="generate_spec")
    async def generate_spec_tool(
        prompt: str,
        context: str | None = None,
        format: SpecFormat = "markdown",
    ) -> str:
        """
        Generate a technical specification from a short description.

        Args:
            prompt: What the specification should cover
            context: Additional background for the writer
            format: markdown, or structured (sections plus acceptance criteria)
        """
        options = SpecGenerationOptions(prompt=prompt, context=context, format=format)
        return await respond(generate_spec(options))

    @mcp.tool(name="review_spec")
    async def review_spec_tool(spec: str, focus_areas: list[str] | None = None) -> str:
        """
        Critically review a specification for completeness, feasibility and ambiguity.

        Args:
            spec: The specification text
            focus_areas: Areas to pay special attention to
        """
        options = SpecReviewOptions(spec=spec, focus_areas=tuple(focus_areas or ()))
        return await respond(review_spec(options))

    @mcp.tool(name="review_code")
    async def review_code_tool(
        diff: str,
        context: str | None = None,
        review_type: ReviewType = "all",
    ) -> str:
        """
        Review code changes with severity-ranked, actionable feedback.

        Args:
            diff: Unified diff or code to review
            context: What the change is for
            review_type: security, performance, style, logic or all
        """
        options = CodeReviewOptions(diff=diff, context=context, review_type=review_type)
        return await respond(review_code(options))


__all__ = [
    "REVIEW_FOCUS",
    "SpecGenerationOptions",
    "SpecReviewOptions",
    "CodeReviewOptions",
    "GenerateSpecPrompts",
    "ReviewSpecPrompts",
    "ReviewCodePrompts",
    "generate_spec",
    "review_spec",
    "review_code",
    "register_review_tools",
]
