"""Prompt templates for skill extraction from résumés and job descriptions."""

from typing import Optional

EXTRACTION_SYSTEM_PROMPT = """You are a precise skills extraction system.
You read résumés and job descriptions and return the skills they mention as a single JSON object.
Return only valid JSON (no markdown, no code block, no text before or after the object)."""

_DOCUMENT_LABELS = {
    "job": "job description",
    "resume": "résumé",
}

_JSON_STRUCTURE = """{
  "technical": ["skill1", "skill2"],
  "soft": ["skill1", "skill2"],
  "tools": ["tool1", "tool2"],
  "frameworks": ["framework1", "framework2"],
  "languages": ["language1", "language2"],
  "databases": ["database1", "database2"],
  "methodologies": ["methodology1", "methodology2"],
  "platforms": ["platform1", "platform2"],
  "other": ["other1", "other2"]
}"""

_FORMAT_RULES = """JSON formatting rules:
1. Use double quotes for all strings and property names
2. No trailing commas after the last item in arrays or objects
3. Separate every array element with exactly one comma
4. If a category has no skills, use an empty array []
5. Include all nine keys, and no other keys"""

_EXTRACTION_GUIDELINES = """Extraction guidelines:
1. Extract actual skills, not general requirements
2. Include explicitly stated skills and clearly implied ones
3. Normalize spelling variants (e.g. "React.js" and "ReactJS" become "React")
4. No duplicate skills within a category
5. Never list experience durations (e.g. "5+ years") as skills

Categories:
- technical: core technical abilities and knowledge areas
- soft: interpersonal and non-technical professional skills
- tools: software applications and utilities
- frameworks: programming frameworks and libraries
- languages: programming and markup languages
- databases: database technologies and data stores
- methodologies: work approaches and processes
- platforms: operating systems, cloud platforms and infrastructure
- other: skills that fit none of the above"""

_EXAMPLE = """Example response (software engineer):
{
  "technical": ["system architecture", "API design", "performance optimization"],
  "soft": ["communication", "teamwork", "problem solving"],
  "tools": ["Git", "JIRA", "Docker"],
  "frameworks": ["React", "Node.js", "Express"],
  "languages": ["JavaScript", "TypeScript", "Python"],
  "databases": ["MongoDB", "PostgreSQL"],
  "methodologies": ["Agile", "Scrum", "TDD"],
  "platforms": ["AWS", "Kubernetes"],
  "other": ["CI/CD", "microservices"]
}"""

_RESUME_HINT = (
    "Consider every section: summary, experience, projects, education and certifications. "
    "Only include skills the candidate actually shows."
)
_JOB_HINT = "Include both required and preferred qualifications."


def build_extraction_prompt(
    document_kind: str,
    text: str,
    chunk_index: Optional[int] = None,
    total_chunks: Optional[int] = None,
) -> str:
    """User prompt for one document (or one chunk of it, when chunk_index is given)."""
    label = _DOCUMENT_LABELS.get(document_kind, "document")
    hint = _RESUME_HINT if document_kind == "resume" else _JOB_HINT
    if chunk_index is not None and total_chunks:
        header = f"This is chunk {chunk_index} of {total_chunks} from a {label}.\n\n{label.capitalize()} chunk:"
        scope = "this chunk"
    else:
        header = f"{label.capitalize()}:"
        scope = f"the {label}"
    return (
        f"{header}\n{text}\n\n"
        f"Extract all skills mentioned in {scope} and categorize them. {hint}\n"
        f"Return ONLY a JSON object with this structure:\n{_JSON_STRUCTURE}\n\n"
        f"{_FORMAT_RULES}\n\n{_EXTRACTION_GUIDELINES}\n\n{_EXAMPLE}\n\n"
        f"Now extract the skills from {scope} and return ONLY the JSON object."
    )
