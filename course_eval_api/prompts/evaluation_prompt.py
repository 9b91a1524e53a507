"""
Evaluation Summary Prompt

Fixed instructions sent with every course evaluation. The model is trusted
to follow the output format; nothing here validates it.
"""

import base64
from typing import Dict, List

SECTION_HEADERS = (
    "CONSTRUCTIVE FEEDBACK SUMMARY",
    "POSITIVE COMMENTS",
    "OVERALL SENTIMENT",
)

PERSONA = "You are a kind and constructive assistant helping instructors analyze course evaluations."

EXTRACTION_STEP = """First, extract all the student comments from this course evaluation PDF. Focus on the sections asking about:
1. What aspects of this course and the instructor's teaching contributed most to your learning?
2. What aspects of this course and the instructor's teaching could be changed to enhance your learning?

Then, analyze the comments to:"""

ANALYSIS_TASKS = """1. Filter out any comments that are mean, hurtful, or purely negative without constructive value
2. Categorize constructive feedback into themes and count frequency
3. Summarize actionable suggestions with frequency indicators
4. Extract positive/uplifting comments verbatim"""

OUTPUT_FORMAT = f"""Return the response in this exact format:

## {SECTION_HEADERS[0]}

**Most Frequent Suggestions:**
• [Theme] (mentioned X times): [Summary of suggestions]
• [Theme] (mentioned X times): [Summary of suggestions]
• [Theme] (mentioned X times): [Summary of suggestions]

**Additional Suggestions:**
• [Less frequent but valuable feedback]

## {SECTION_HEADERS[1]}

**Encouraging Feedback:**
"[Exact quote from student]"

"[Exact quote from student]"

"[Exact quote from student]"

**Additional Positive Notes:**
• [Paraphrased positive feedback that wasn't quotable]

## {SECTION_HEADERS[2]}
[Brief summary of the overall tone and any patterns you noticed]

Please be thorough but concise, focusing on actionable insights that will help the instructor improve while maintaining their confidence."""

TEXT_INSTRUCTIONS = f"""{PERSONA} Your task is to:

{ANALYSIS_TASKS}

{OUTPUT_FORMAT}"""

DOCUMENT_INSTRUCTIONS = f"""{PERSONA}

{EXTRACTION_STEP}
{ANALYSIS_TASKS}

{OUTPUT_FORMAT}"""


def build_text_prompt(text: str) -> str:
    """Instructions followed by the extracted evaluation text, verbatim."""
    return f"{TEXT_INSTRUCTIONS}\n\nCourse evaluation comments:\n\n{text}"


def build_document_content(pdf_bytes: bytes) -> List[Dict]:
    """Message content attaching the PDF itself, then the instructions."""
    return [
        {
            "type": "document",
            "source": {
                "type": "base64",
                "media_type": "application/pdf",
                "data": base64.standard_b64encode(pdf_bytes).decode("ascii"),
            },
        },
        {
            "type": "text",
            "text": DOCUMENT_INSTRUCTIONS,
        },
    ]
