"""
Prompt templates for the single-phase deck generator.

One template pair per GenerationMode. The templates are plain data so they
can be versioned and tested without running the generator; the only logic
here is filling them in.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from agents.domain.models import GenerationMode


@dataclass(frozen=True)
class PromptTemplate:
    system: str
    # {content}, {instructions_block}, {reference_materials} are substituted
    user: str
    instructions_heading: str


STRICT_SYSTEM_PROMPT = """You are a precise pitch deck builder. You convert the user's outline into a structured slide deck and add nothing of your own.

STRICT RULES:
- Use ONLY the content the user provides
- Keep the user's slide structure and layout exactly as given
- Copy the user's image descriptions without changing them
- Never add, drop or reorder content
- Never suggest improvements or alternatives
- Never add graphics the user did not describe
- You are a conversion tool from outline to JSON"""

STRICT_WITH_GRAPHICS_SYSTEM_PROMPT = """You are a precise pitch deck builder who also enhances slides visually.

CONTENT RULES:
- Use ONLY the content the user provides
- Keep the user's slide structure and layout exactly as given
- Never add, drop or reorder content
- Never rewrite the user's text

GRAPHICS RULES:
- Where the user described a graphic or image, use that description exactly
- Where the user did not, propose a visual that fits the slide (chart, diagram, icon, illustration, photo)
- Name the concrete visualization type (bar chart, line graph, pie chart, icon, illustration ...)"""

CREATIVE_SYSTEM_PROMPT = """You are an expert pitch deck creator and storyteller. You turn ideas into compelling visual narratives.

PRINCIPLES:
- Every deck tells a memorable story
- Visuals over text: few words, strong graphics and data visualizations
- Tailor tone and content to the audience
- Express complex ideas simply

STRUCTURE:
- If the user supplies an outline, follow it exactly
- Otherwise use the classic flow: hook, problem, solution, market, product, traction, team, ask

CONTENT:
- Headlines are bold and action-oriented, 5-10 words
- Body text is 3-5 bullets per slide, each under 10 words
- Use specific numbers, percentages and growth metrics from the reference material
- Suggest a chart, diagram, icon or image for EVERY slide

OUTPUT: pure JSON with the content and the visual guidance."""

STRICT_USER_TEMPLATE = """BUILD ONLY MODE: use ONLY the exact content and structure below.

## User's Exact Content:
{content}
{instructions_block}
{reference_materials}

RULES:
- Follow the user's slide structure if one is given
- Use the user's image descriptions verbatim; include a "graphic" only where the user described one
- Add no creative interpretation, no extra content, no alternative layouts
- Only convert the outline into the JSON format below

Return the result as a JSON object with this structure:"""

STRICT_WITH_GRAPHICS_USER_TEMPLATE = """BUILD ONLY MODE WITH GRAPHICS ENHANCEMENT

## User's Exact Content:
{content}
{instructions_block}
{reference_materials}

CONTENT RULES:
- Use ONLY the content, structure and layout the user provided
- Do not add, remove, reorganize or improve text

GRAPHICS RULES:
- Slides where the user described a graphic: use that description exactly as the "graphic" prompt
- Slides without one: add a "graphic" whose prompt suits the slide content
- Visuals must support the message without changing the content

Return the result as a JSON object with this structure:"""

CREATIVE_USER_TEMPLATE = """Create a professional pitch deck from the following information.

## Main Content:
{content}
{instructions_block}
{reference_materials}

Create 8-12 slides. Where brand assets are listed above, use the brand colors in the theme.
Give every slide a "graphic" with a detailed, specific prompt.

Return the result as a JSON object with this structure:"""

OUTPUT_FORMAT_SUFFIX = """
{
  "name": "Deck Title",
  "description": "Brief description",
  "slides": [
    {
      "type": "title",
      "title": "Main Title",
      "subtitle": "Subtitle"
    },
    {
      "type": "content",
      "title": "Slide Title",
      "content": "Bullet points or content",
      "graphic": {"type": "image", "prompt": "Detailed description of the visual", "position": "right"}
    }
  ],
  "theme": {
    "colors": {
      "primary": "#2563eb",
      "secondary": "#7c3aed",
      "accent": "#f59e0b",
      "background": "#ffffff",
      "text": "#1f2937"
    }
  }
}

Slide types: "title", "content", "two-column", "image".
For two-column include "leftContent" and "rightContent".
"graphic" is optional: "type" is "image" or "icon", "position" is "background", "center", "left" or "right".
"""

PROMPT_TEMPLATES: Dict[GenerationMode, PromptTemplate] = {
    GenerationMode.STRICT: PromptTemplate(
        system=STRICT_SYSTEM_PROMPT,
        user=STRICT_USER_TEMPLATE,
        instructions_heading="## User's Exact Instructions & Layout:",
    ),
    GenerationMode.STRICT_WITH_GRAPHICS: PromptTemplate(
        system=STRICT_WITH_GRAPHICS_SYSTEM_PROMPT,
        user=STRICT_WITH_GRAPHICS_USER_TEMPLATE,
        instructions_heading="## User's Exact Instructions & Layout:",
    ),
    GenerationMode.CREATIVE: PromptTemplate(
        system=CREATIVE_SYSTEM_PROMPT,
        user=CREATIVE_USER_TEMPLATE,
        instructions_heading="## Custom Instructions:",
    ),
}


def build_single_phase_prompts(
    mode: GenerationMode,
    content: str,
    instructions: Optional[str] = None,
    reference_materials: str = "",
    system_prompt_override: Optional[str] = None,
) -> Tuple[str, str]:
    """Return (system_prompt, user_prompt) for `mode`.

    The admin override only replaces the creative system prompt; strict
    modes always keep their own rules.
    """
    template = PROMPT_TEMPLATES[mode]
    system = template.system
    if mode == GenerationMode.CREATIVE and system_prompt_override and system_prompt_override.strip():
        system = system_prompt_override

    instructions_block = f"\n{template.instructions_heading}\n{instructions}\n" if instructions else ""
    user = template.user.format(
        content=content,
        instructions_block=instructions_block,
        reference_materials=reference_materials or "",
    )
    return system, user + OUTPUT_FORMAT_SUFFIX
