import pytest

from skill_gap_ai.matching.skill_graph import (
    ALTERNATIVE_TO,
    CHILD_OF,
    REQUIRES,
    USED_WITH,
    SkillGraph,
    find_all_matches,
    find_exact_matches,
    find_implied_matches,
    find_semantic_matches,
    get_skill_graph,
    graph_key,
    match_with_graph,
)


def _versions_graph() -> SkillGraph:
    graph = SkillGraph()
    graph.add_skill("vue2", "Vue.js 2")
    graph.add_skill("vue3", "Vue.js 3")
    return graph


def test_graph_key_drops_case_spaces_and_punctuation() -> None:
    assert graph_key(" Node.js ") == "nodejs"
    assert graph_key("C#") == "c#"
    assert graph_key("C++") == "c++"
    assert graph_key("") == ""


def test_find_skill_prefers_primary_name_over_alias() -> None:
    graph = SkillGraph()
    graph.add_skill("a", "Alpha", ("Beta",))
    graph.add_skill("b", "Beta")

    assert graph.find_skill("beta").id == "b"
    assert graph.find_skill("ALPHA").id == "a"
    assert graph.find_skill("gamma") is None
    assert graph.find_skill("  ") is None


def test_relationships_store_their_inverse() -> None:
    graph = get_skill_graph()

    assert graph.is_related("django", "python", (REQUIRES,))
    assert graph.is_related("python", "django", (USED_WITH,))
    assert graph.is_related("deep-learning", "machine-learning", (CHILD_OF,))
    assert graph.is_related("mysql", "postgresql", (ALTERNATIVE_TO,))
    assert not graph.is_related("python", "django", (REQUIRES,))
    assert "django" in [node.id for node in graph.related("python")]


def test_relationship_between_unknown_skills_is_rejected() -> None:
    graph = SkillGraph()
    graph.add_skill("python", "Python")

    with pytest.raises(ValueError):
        graph.add_relationship("python", "cobol", REQUIRES)
    with pytest.raises(ValueError):
        graph.add_relationship("python", "python", "LIKES")


def test_default_graph_is_shared() -> None:
    assert get_skill_graph() is get_skill_graph()
    assert len(get_skill_graph()) > 0


def test_exact_matches_resolve_aliases_to_one_node() -> None:
    matches = find_exact_matches(["K8s", "golang"], ["Kubernetes", "Go", "Rust", "Kubernetes"])
    assert matches == ["Kubernetes", "Go"]


def test_semantic_matches_use_alternative_and_similar_relations() -> None:
    assert find_semantic_matches(["MySQL"], ["PostgreSQL", "Redis"]) == ["PostgreSQL"]
    assert find_semantic_matches(["PostgreSQL"], ["MySQL"]) == ["MySQL"]
    assert find_semantic_matches(["TypeScript"], ["JavaScript"]) == ["JavaScript"]
    # Same node is an exact match, not a semantic one
    assert find_semantic_matches(["Postgres"], ["PostgreSQL"]) == []


def test_semantic_matches_fall_back_to_name_similarity() -> None:
    graph = _versions_graph()

    assert find_semantic_matches(["Vue.js 2"], ["Vue.js 3"], graph=graph) == ["Vue.js 3"]
    assert find_semantic_matches(["Vue.js 2"], ["Vue.js 3"], threshold=0.9, graph=graph) == []


def test_implied_matches_follow_parent_and_prerequisite_relations() -> None:
    matches = find_implied_matches(["Python", "Machine Learning"], ["Django", "Deep Learning", "Go"])
    assert matches == ["Django", "Deep Learning"]


def test_implied_matches_are_directional() -> None:
    assert find_implied_matches(["Django"], ["Python"]) == []
    assert find_implied_matches(["Deep Learning"], ["Machine Learning"]) == []
    assert find_implied_matches(["Web Security"], ["OAuth"]) == ["OAuth"]


def test_unknown_skills_never_match_through_the_graph() -> None:
    assert find_all_matches(["Haskell"], ["Haskell", "Elm"]) == []
    assert find_all_matches([], ["Python"]) == []


def test_all_matches_combine_match_kinds_in_job_order() -> None:
    matches = find_all_matches(["Python", "MySQL", "K8s"], ["Kubernetes", "PostgreSQL", "Django", "Haskell"])
    assert matches == ["Kubernetes", "PostgreSQL", "Django"]


def test_match_with_graph_promotes_graph_matches_from_missing() -> None:
    result = match_with_graph(["Python", "PostgreSQL", "Kubernetes", "Haskell"], ["python", "MySQL", "K8s"])

    assert result.matched_skills == {"Python", "PostgreSQL", "Kubernetes"}
    assert result.missing_skills == {"Haskell"}
    assert result.match_percentage == 75.0


def test_match_with_graph_equals_plain_match_without_graph_hits() -> None:
    result = match_with_graph(["Haskell", "Elm"], ["Python"])

    assert result.matched_skills == frozenset()
    assert result.match_percentage == 0.0
