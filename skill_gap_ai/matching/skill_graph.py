"""
Related-skills graph: known skills linked by typed relations, used to count
alternatives, near-identical names and implied prerequisites as matches.
"""

import re
from functools import lru_cache
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple

from rapidfuzz import fuzz, process

from skill_gap_ai.matching.skill_matcher import _round_half_up, match
from skill_gap_ai.schemas.match_result import MatchResult
from skill_gap_ai.utils.logger import get_logger

logger = get_logger(__name__)

PARENT_OF = "PARENT_OF"
CHILD_OF = "CHILD_OF"
REQUIRES = "REQUIRES"
USED_WITH = "USED_WITH"
SIMILAR_TO = "SIMILAR_TO"
ALTERNATIVE_TO = "ALTERNATIVE_TO"

RELATION_TYPES: Tuple[str, ...] = (PARENT_OF, CHILD_OF, REQUIRES, USED_WITH, SIMILAR_TO, ALTERNATIVE_TO)

# Stored alongside every added relation; USED_WITH has no inverse
INVERSE_RELATIONS: Dict[str, str] = {
    PARENT_OF: CHILD_OF,
    CHILD_OF: PARENT_OF,
    REQUIRES: USED_WITH,
    SIMILAR_TO: SIMILAR_TO,
    ALTERNATIVE_TO: ALTERNATIVE_TO,
}

SEMANTIC_RELATIONS = (SIMILAR_TO, ALTERNATIVE_TO)
DEFAULT_SIMILARITY_THRESHOLD = 0.8


class SkillNode(NamedTuple):
    id: str
    name: str
    aliases: Tuple[str, ...] = ()


def graph_key(name: str) -> str:
    """Lowercase name without spaces or punctuation; '+' and '#' are kept (C++, C#)."""
    return re.sub(r"[^\w+#]", "", (name or "").lower())


class SkillGraph:
    """
    Directed, typed relations between skill nodes. Names resolve to nodes by
    primary name first, then by alias, both compared through graph_key.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, SkillNode] = {}
        self._by_name: Dict[str, str] = {}
        self._by_alias: Dict[str, str] = {}
        self._edges: Set[Tuple[str, str, str]] = set()

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._nodes

    def add_skill(self, skill_id: str, name: str, aliases: Iterable[str] = ()) -> SkillNode:
        node = SkillNode(skill_id, name, tuple(aliases))
        self._nodes[skill_id] = node
        self._by_name[graph_key(name)] = skill_id
        for alias in node.aliases:
            self._by_alias.setdefault(graph_key(alias), skill_id)
        return node

    def add_relationship(self, source_id: str, target_id: str, relation: str) -> None:
        if relation not in RELATION_TYPES:
            raise ValueError(f"unknown relation type: {relation}")
        missing = [i for i in (source_id, target_id) if i not in self._nodes]
        if missing:
            raise ValueError(f"cannot relate unknown skills: {missing}")
        self._edges.add((source_id, target_id, relation))
        inverse = INVERSE_RELATIONS.get(relation)
        if inverse is not None:
            self._edges.add((target_id, source_id, inverse))

    def node(self, skill_id: str) -> Optional[SkillNode]:
        return self._nodes.get(skill_id)

    def find_skill(self, name: str) -> Optional[SkillNode]:
        key = graph_key(name)
        if not key:
            return None
        skill_id = self._by_name.get(key) or self._by_alias.get(key)
        return self._nodes[skill_id] if skill_id else None

    def is_related(self, source_id: str, target_id: str, relations: Optional[Sequence[str]] = None) -> bool:
        if relations is None:
            return any((source_id, target_id, r) in self._edges for r in RELATION_TYPES)
        return any((source_id, target_id, r) in self._edges for r in relations)

    def related(self, skill_id: str, relations: Optional[Sequence[str]] = None) -> List[SkillNode]:
        wanted = RELATION_TYPES if relations is None else relations
        ids = sorted({t for s, t, r in self._edges if s == skill_id and r in wanted})
        return [self._nodes[i] for i in ids]

    def find_similar(self, name: str, threshold: float = 0.7) -> List[SkillNode]:
        """
        Nodes whose name or any alias scores at least `threshold` (0-1) against
        `name` by rapidfuzz's normalized edit ratio, best score first.
        """
        query = graph_key(name)
        if not query:
            return []
        terms = list(self._by_name.items()) + list(self._by_alias.items())
        hits = process.extract(
            query,
            [term for term, _ in terms],
            scorer=fuzz.ratio,
            score_cutoff=threshold * 100.0,
            limit=None,
        )
        found: List[SkillNode] = []
        for _, _, index in hits:
            node = self._nodes[terms[index][1]]
            if node not in found:
                found.append(node)
        return found


# (id, name, aliases)
_SEED_SKILLS: Tuple[Tuple[str, str, Tuple[str, ...]], ...] = (
    ("javascript", "JavaScript", ("JS", "ECMAScript")),
    ("typescript", "TypeScript", ("TS",)),
    ("python", "Python", ()),
    ("java", "Java", ()),
    ("csharp", "C#", ("CSharp", "C Sharp")),
    ("php", "PHP", ()),
    ("ruby", "Ruby", ()),
    ("go", "Go", ("Golang",)),
    ("sql", "SQL", ("Structured Query Language",)),
    ("html", "HTML", ("HTML5",)),
    ("css", "CSS", ("CSS3", "Cascading Style Sheets")),
    ("react", "React", ("React.js", "ReactJS")),
    ("angular", "Angular", ("Angular.js", "AngularJS")),
    ("vue", "Vue.js", ("Vue", "VueJS")),
    ("nextjs", "Next.js", ("Next", "NextJS")),
    ("redux", "Redux", ()),
    ("nodejs", "Node.js", ("Node", "NodeJS")),
    ("express", "Express", ("Express.js", "ExpressJS")),
    ("django", "Django", ()),
    ("flask", "Flask", ()),
    ("fastapi", "FastAPI", ()),
    ("spring-boot", "Spring Boot", ("Spring",)),
    ("dotnet", ".NET", ("dotnet", "ASP.NET")),
    ("laravel", "Laravel", ()),
    ("rails", "Ruby on Rails", ("Rails", "RoR")),
    ("postgresql", "PostgreSQL", ("Postgres",)),
    ("mysql", "MySQL", ()),
    ("mongodb", "MongoDB", ("Mongo",)),
    ("redis", "Redis", ()),
    ("graphql", "GraphQL", ()),
    ("rest-api", "RESTful API", ("REST API", "REST")),
    ("docker", "Docker", ()),
    ("kubernetes", "Kubernetes", ("K8s",)),
    ("aws", "Amazon Web Services", ("AWS",)),
    ("azure", "Microsoft Azure", ("Azure",)),
    ("gcp", "Google Cloud Platform", ("GCP", "Google Cloud")),
    ("cicd", "CI/CD", ("Continuous Integration",)),
    ("oauth", "OAuth", ("OAuth2", "OAuth 2.0")),
    ("jwt", "JWT", ("JSON Web Tokens",)),
    ("web-security", "Security Best Practices", ("Web Security",)),
    ("machine-learning", "Machine Learning", ("ML",)),
    ("deep-learning", "Deep Learning", ("DL",)),
    ("tensorflow", "TensorFlow", ("TF",)),
    ("pytorch", "PyTorch", ()),
)

# (source, target, relation)
_SEED_RELATIONSHIPS: Tuple[Tuple[str, str, str], ...] = (
    ("typescript", "javascript", REQUIRES),
    ("nodejs", "javascript", REQUIRES),
    ("express", "nodejs", REQUIRES),
    ("react", "javascript", REQUIRES),
    ("vue", "javascript", REQUIRES),
    ("angular", "typescript", REQUIRES),
    ("nextjs", "react", REQUIRES),
    ("redux", "javascript", REQUIRES),
    ("django", "python", REQUIRES),
    ("flask", "python", REQUIRES),
    ("fastapi", "python", REQUIRES),
    ("tensorflow", "python", REQUIRES),
    ("pytorch", "python", REQUIRES),
    ("spring-boot", "java", REQUIRES),
    ("laravel", "php", REQUIRES),
    ("rails", "ruby", REQUIRES),
    ("postgresql", "sql", REQUIRES),
    ("mysql", "sql", REQUIRES),
    ("kubernetes", "docker", REQUIRES),
    ("dotnet", "csharp", USED_WITH),
    ("redux", "react", USED_WITH),
    ("cicd", "docker", USED_WITH),
    ("jwt", "oauth", USED_WITH),
    ("javascript", "typescript", SIMILAR_TO),
    ("react", "angular", ALTERNATIVE_TO),
    ("react", "vue", ALTERNATIVE_TO),
    ("angular", "vue", ALTERNATIVE_TO),
    ("express", "django", ALTERNATIVE_TO),
    ("django", "flask", ALTERNATIVE_TO),
    ("flask", "fastapi", ALTERNATIVE_TO),
    ("spring-boot", "dotnet", ALTERNATIVE_TO),
    ("postgresql", "mysql", ALTERNATIVE_TO),
    ("mongodb", "postgresql", ALTERNATIVE_TO),
    ("graphql", "rest-api", ALTERNATIVE_TO),
    ("aws", "azure", ALTERNATIVE_TO),
    ("aws", "gcp", ALTERNATIVE_TO),
    ("azure", "gcp", ALTERNATIVE_TO),
    ("tensorflow", "pytorch", ALTERNATIVE_TO),
    ("web-security", "oauth", PARENT_OF),
    ("web-security", "jwt", PARENT_OF),
    ("machine-learning", "deep-learning", PARENT_OF),
)


@lru_cache(maxsize=1)
def get_skill_graph() -> SkillGraph:
    """Process-wide graph of common software skills; build your own SkillGraph to extend it."""
    graph = SkillGraph()
    for skill_id, name, aliases in _SEED_SKILLS:
        graph.add_skill(skill_id, name, aliases)
    for source, target, relation in _SEED_RELATIONSHIPS:
        graph.add_relationship(source, target, relation)
    logger.debug("Skill graph built: %s skills, %s relations", len(graph), len(_SEED_RELATIONSHIPS))
    return graph


def _resolve_all(skills: Iterable[str], graph: SkillGraph) -> List[Tuple[str, SkillNode]]:
    resolved = []
    for skill in skills:
        node = graph.find_skill(skill) if skill else None
        if node is not None:
            resolved.append((skill, node))
    return resolved


def _collect(job_skills: Iterable[Tuple[str, SkillNode]], hit: Callable[[SkillNode], bool]) -> List[str]:
    # Job-side labels in input order, each reported once
    matches: List[str] = []
    for job_skill, job_node in job_skills:
        if job_skill not in matches and hit(job_node):
            matches.append(job_skill)
    return matches


def find_exact_matches(
    resume_skills: Iterable[str],
    job_skills: Iterable[str],
    graph: Optional[SkillGraph] = None,
) -> List[str]:
    """Job skills that resolve to the same graph node as some résumé skill (e.g. K8s / Kubernetes)."""
    graph = graph or get_skill_graph()
    resume_ids = {node.id for _, node in _resolve_all(resume_skills, graph)}
    return _collect(_resolve_all(job_skills, graph), lambda job_node: job_node.id in resume_ids)


def find_semantic_matches(
    resume_skills: Iterable[str],
    job_skills: Iterable[str],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    graph: Optional[SkillGraph] = None,
) -> List[str]:
    """
    Job skills on a different node that a résumé skill is SIMILAR_TO or
    ALTERNATIVE_TO, or whose node is among the résumé skill's near-identical
    names (name similarity >= threshold).
    """
    graph = graph or get_skill_graph()
    resume = _resolve_all(resume_skills, graph)
    similar = {skill: {n.id for n in graph.find_similar(skill, threshold)} for skill, _ in resume}

    def hit(job_node: SkillNode) -> bool:
        for skill, node in resume:
            if node.id == job_node.id:
                continue
            if graph.is_related(node.id, job_node.id, SEMANTIC_RELATIONS) or job_node.id in similar[skill]:
                return True
        return False

    return _collect(_resolve_all(job_skills, graph), hit)


def find_implied_matches(
    resume_skills: Iterable[str],
    job_skills: Iterable[str],
    graph: Optional[SkillGraph] = None,
) -> List[str]:
    """
    Job skills implied by a résumé skill: the résumé skill is PARENT_OF the job
    skill, or the job skill REQUIRES the résumé skill (Python on a résumé
    counts toward a Django requirement, not the other way round).
    """
    graph = graph or get_skill_graph()
    resume_nodes = [node for _, node in _resolve_all(resume_skills, graph)]

    def hit(job_node: SkillNode) -> bool:
        return any(
            node.id != job_node.id
            and (
                graph.is_related(node.id, job_node.id, (PARENT_OF,))
                or graph.is_related(job_node.id, node.id, (REQUIRES,))
            )
            for node in resume_nodes
        )

    return _collect(_resolve_all(job_skills, graph), hit)


def find_all_matches(
    resume_skills: Sequence[str],
    job_skills: Sequence[str],
    graph: Optional[SkillGraph] = None,
) -> List[str]:
    """Exact, semantic and implied matches combined, in job order without repeats."""
    graph = graph or get_skill_graph()
    found = set(find_exact_matches(resume_skills, job_skills, graph))
    found.update(find_semantic_matches(resume_skills, job_skills, graph=graph))
    found.update(find_implied_matches(resume_skills, job_skills, graph))
    return [skill for i, skill in enumerate(job_skills) if skill in found and skill not in job_skills[:i]]


def match_with_graph(
    reference: Sequence[str],
    candidate: Sequence[str],
    graph: Optional[SkillGraph] = None,
) -> MatchResult:
    """
    `match` extended with graph matches: a reference skill missing by name
    equivalence still counts as matched when the candidate side covers it
    exactly, semantically or by implication.
    """
    base = match(reference, candidate)
    graph_hits = {s.strip() for s in find_all_matches(list(candidate), list(reference), graph)}
    promoted = base.missing_skills & graph_hits
    if not promoted:
        return base
    matched = base.matched_skills | promoted
    missing = base.missing_skills - promoted
    total = len(matched) + len(missing)
    logger.debug("Graph matching promoted %s skill(s): %s", len(promoted), sorted(promoted))
    return MatchResult(
        match_percentage=_round_half_up(100.0 * len(matched) / total),
        matched_skills=matched,
        missing_skills=missing,
    )
