"""Prompt templates for the text tools.

Each tool maps to a template function taking the user's text, the summary
type and the summary length. Unknown tool names fall through to a generic
template, so building a prompt never fails.
"""

from enum import Enum
from typing import Callable, Dict, Union

DEFAULT_SUMMARY_TYPE = "paragraph"
DEFAULT_SUMMARY_LENGTH = 50


class Tool(str, Enum):
    # Core text tools
    SUMMARIZE = "summarize"
    HUMANIZE = "humanize"
    PLAGIARISM = "plagiarism"
    KEYWORDS = "keywords"
    GRAMMAR = "grammar"
    PARAPHRASE = "paraphrase"
    TONE = "tone"
    EXPAND = "expand"
    SIMPLIFY = "simplify"
    # Study and academic
    CITATION = "citation"
    FLASHCARDS = "flashcards"
    QUIZ = "quiz"
    EXAM = "exam"
    OUTLINE = "outline"
    NOTES = "notes"
    VOCAB = "vocab"
    # Discipline specialised
    CODE = "code"
    LEGAL = "legal"
    MEDICAL = "medical"
    BUSINESS = "business"
    MATH = "math"
    SCIENCE = "science"
    LITERATURE = "literature"
    HISTORY = "history"
    # Premium
    TUTOR = "tutor"
    RESEARCH = "research"
    COMPARE = "compare"
    PRESENTATION = "presentation"
    RESUME = "resume"
    SCHOLARSHIP = "scholarship"
    GROUP = "group"


Template = Callable[[str, str, Union[int, str]], str]


def _simple(instruction: str) -> Template:
    return lambda text, kind, length: f"{instruction}\n\n{text}"


TEMPLATES: Dict[Tool, Template] = {
    Tool.SUMMARIZE: lambda text, kind, length: (
        f"Summarize this text:\n\n{text}\n\n"
        f"Please summarize as {kind} with approximately {length}% length."
    ),
    Tool.HUMANIZE: _simple("Rewrite this text in a more natural, human-like way:"),
    Tool.PLAGIARISM: _simple("Check the following text for plagiarism and provide a short report:"),
    Tool.KEYWORDS: _simple("Extract key keywords and phrases from the following text:"),
    Tool.GRAMMAR: _simple(
        "Check and correct grammar, spelling, and punctuation in this text. "
        "Return the corrected version:"
    ),
    Tool.PARAPHRASE: _simple("Paraphrase this text while keeping the original meaning:"),
    Tool.TONE: lambda text, kind, length: f"Rewrite this text in a {kind} tone:\n\n{text}",
    Tool.EXPAND: lambda text, kind, length: (
        f"Expand this text to be more detailed (make it {length}% longer):\n\n{text}"
    ),
    Tool.SIMPLIFY: _simple("Simplify this text for easier understanding:"),
    Tool.CITATION: lambda text, kind, length: (
        f"Generate {kind} style citations for these sources:\n\n{text}"
    ),
    Tool.FLASHCARDS: lambda text, kind, length: (
        f"Create {length} flashcards from this text. "
        f"Format as: FRONT: [question] BACK: [answer]\n\n{text}"
    ),
    Tool.QUIZ: lambda text, kind, length: (
        f"Create a {length}-question {kind} quiz from this material. "
        f"Include answers at the end:\n\n{text}"
    ),
    Tool.EXAM: lambda text, kind, length: (
        f"Create exam preparation material from this text including {length} key concepts:\n\n{text}"
    ),
    Tool.OUTLINE: _simple("Create a detailed essay outline from this text:"),
    Tool.NOTES: _simple("Create organized study notes from this text:"),
    Tool.VOCAB: lambda text, kind, length: (
        f"Extract {length} important vocabulary words with definitions from:\n\n{text}"
    ),
    Tool.CODE: _simple("Explain this code in simple terms:"),
    Tool.LEGAL: _simple("Summarize this legal document in plain English:"),
    Tool.MEDICAL: _simple("Explain this medical terminology in simple terms:"),
    Tool.BUSINESS: _simple("Analyze this business case study:"),
    Tool.MATH: _simple("Solve this math problem step by step:"),
    Tool.SCIENCE: _simple("Explain this science concept:"),
    Tool.LITERATURE: _simple("Analyze this literary text:"),
    Tool.HISTORY: _simple("Provide historical context for:"),
    Tool.TUTOR: lambda text, kind, length: (
        f'Act as a personal tutor. The user asks: "{text}"\n\n'
        f"Provide clear explanation, examples, and practice questions."
    ),
    Tool.RESEARCH: lambda text, kind, length: (
        f'For this topic: "{text}"\n\nFind and suggest relevant academic resources and links.'
    ),
    Tool.COMPARE: _simple("Compare these two documents/texts:"),
    Tool.PRESENTATION: _simple("Create a presentation script for:"),
    Tool.RESUME: _simple("Improve this resume text:"),
    Tool.SCHOLARSHIP: _simple("Help write a scholarship essay about:"),
    Tool.GROUP: _simple("Create a group project plan for:"),
}


def default_template(tool: str, text: str) -> str:
    return f"Process this text for {tool}:\n\n{text}"


def build_prompt(
    tool: str,
    text: str,
    summary_type: str = DEFAULT_SUMMARY_TYPE,
    summary_length: Union[int, str] = DEFAULT_SUMMARY_LENGTH,
) -> str:
    """Wrap ``text`` in the instruction for ``tool``.

    ``summary_length`` is embedded as given; no range check is applied.
    """
    try:
        template = TEMPLATES[Tool(tool)]
    except ValueError:
        return default_template(tool, text)
    return template(text, summary_type, summary_length)
