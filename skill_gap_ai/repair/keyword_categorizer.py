"""Last-resort categorization of loose tokens by keyword patterns."""

import re
from typing import Dict, List, Tuple

from skill_gap_ai.config import KEYWORD_FALLBACK_LIMIT, SKILL_CATEGORIES


def _terms(*alternatives: str) -> re.Pattern[str]:
    # Boundaries that also treat '+', '#' and '.' as part of a term (C++, C#, Node.js)
    return re.compile(r"(?<![\w+#.])(?:" + "|".join(alternatives) + r")(?![\w+#])", re.IGNORECASE)


# Checked in order; tokens matching none of them are filed under "technical"
CATEGORY_PATTERNS: Tuple[Tuple[str, re.Pattern[str]], ...] = (
    ("languages", _terms(
        r"python", r"java", r"javascript", r"typescript", r"c\+\+", r"c#", r"golang", r"go",
        r"rust", r"ruby", r"php", r"swift", r"kotlin", r"scala", r"perl", r"matlab",
        r"julia", r"dart", r"haskell", r"elixir", r"lua", r"bash", r"html5?", r"css3?",
    )),
    ("frameworks", _terms(
        r"react(?:\.?js)?", r"angular(?:js)?", r"vue(?:\.?js)?", r"next\.?js", r"nuxt",
        r"svelte", r"express(?:\.js)?", r"django", r"flask", r"fastapi", r"spring(?: boot)?",
        r"rails", r"laravel", r"asp\.net", r"\.net", r"tensorflow", r"pytorch", r"keras",
        r"scikit-learn", r"pandas", r"numpy", r"langchain", r"node(?:\.?js)?", r"jquery",
        r"bootstrap", r"tailwind(?:css)?",
    )),
    ("databases", _terms(
        r"sql", r"mysql", r"postgres(?:ql)?", r"mongo(?:db)?", r"redis", r"sqlite",
        r"oracle", r"cassandra", r"dynamodb", r"elasticsearch", r"mariadb", r"sql server",
        r"neo4j", r"snowflake", r"bigquery", r"firebase", r"couchdb", r"nosql",
    )),
    ("platforms", _terms(
        r"aws", r"amazon web services", r"azure", r"gcp", r"google cloud(?: platform)?",
        r"linux", r"unix", r"windows", r"macos", r"ios", r"android", r"heroku", r"vercel",
        r"netlify", r"digitalocean", r"salesforce", r"shopify",
    )),
    ("tools", _terms(
        r"git", r"github(?: actions)?", r"gitlab", r"bitbucket", r"jira", r"confluence",
        r"docker", r"kubernetes", r"k8s", r"terraform", r"ansible", r"jenkins", r"webpack",
        r"figma", r"postman", r"tableau", r"power bi", r"excel", r"jupyter", r"vs ?code",
        r"grafana", r"prometheus", r"circleci", r"slack", r"trello",
    )),
    ("methodologies", _terms(
        r"agile", r"scrum", r"kanban", r"waterfall", r"tdd", r"bdd", r"ddd", r"ci/cd",
        r"devops", r"lean", r"six sigma", r"test-driven development", r"microservices",
        r"gitops", r"pair programming", r"code reviews?",
    )),
    ("soft", _terms(
        r"communication", r"teamwork", r"leadership", r"problem[- ]solving",
        r"critical thinking", r"time management", r"collaboration", r"adaptability",
        r"creativity", r"attention to detail", r"negotiation", r"mentoring", r"presentation",
        r"stakeholder management", r"conflict resolution", r"decision[- ]making",
        r"emotional intelligence", r"organi[sz]ation(?:al)?", r"self-motivated",
    )),
)

STOPWORDS = frozenset({
    "about", "above", "across", "after", "again", "also", "being", "below", "between",
    "both", "could", "does", "doing", "down", "during", "each", "from", "further", "have",
    "having", "here", "into", "just", "like", "more", "most", "must", "need", "only",
    "over", "same", "should", "some", "such", "than", "that", "their", "them", "then",
    "there", "these", "they", "this", "those", "through", "under", "until", "very", "were",
    "what", "when", "where", "which", "while", "with", "within", "would", "your", "years",
    "year", "work", "working", "team", "able", "will", "strong", "skill", "skills",
    "knowledge", "using", "including", "ability", "required", "requirements", "preferred",
    "plus", "well", "experience", "experienced", "role", "responsibilities", "candidate",
    "company", "position", "join", "looking", "help", "good", "great", "excellent",
    "understanding", "familiarity", "proficiency", "proficient", "here's", "json",
    "sure", "following", "extracted", "list", "lists", "category", "categories",
    "know", "knows", "love", "built", "build", "worked", "used", "familiar", "hands-on",
})

_QUOTED_RE = re.compile(r'"([^"\n]{1,80})"')
_WORD_RE = re.compile(r"[A-Za-z][A-Za-z0-9+#./-]*")
_MIN_WORD_LENGTH = 4


def categorize_token(token: str) -> str:
    for category, pattern in CATEGORY_PATTERNS:
        if pattern.search(token):
            return category
    return "technical"


def candidate_tokens(text: str) -> Tuple[List[str], bool]:
    """
    Quoted substrings when the text has any (category labels excluded), otherwise
    standalone words of at least four characters minus stopwords. The flag is True
    for the quoted path.
    """
    labels = {c.lower() for c in SKILL_CATEGORIES}
    quoted = [q.strip() for q in _QUOTED_RE.findall(text or "")]
    quoted = [q for q in quoted if q and q.lower() not in labels and q.lower() != "name"]
    if quoted:
        return quoted, True
    words: List[str] = []
    for word in _WORD_RE.findall(text or ""):
        word = word.rstrip(".-/")
        lowered = word.lower()
        if len(word) < _MIN_WORD_LENGTH or lowered in STOPWORDS or lowered in labels:
            continue
        words.append(word)
    return words, False


def categorize_keywords(text: str, limit: int = KEYWORD_FALLBACK_LIMIT) -> Dict[str, List[str]]:
    """
    Sort loose tokens from `text` into categories by keyword patterns.
    Loose words are capped at `limit` per category; quoted items are not capped.
    Case-insensitive duplicates are dropped.
    """
    tokens, quoted = candidate_tokens(text)
    result: Dict[str, List[str]] = {c: [] for c in SKILL_CATEGORIES}
    seen: set = set()
    for token in tokens:
        key = token.casefold()
        if key in seen:
            continue
        category = categorize_token(token)
        if not quoted and len(result[category]) >= limit:
            continue
        seen.add(key)
        result[category].append(token)
    return result
