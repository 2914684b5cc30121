"""Read-only abbreviation <-> full form table for skill names."""

from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Mapping, Optional

# Keys are matched exactly (case-sensitive) after trimming
ABBREVIATIONS: Dict[str, str] = {
    # Cloud & infrastructure
    "AWS": "Amazon Web Services",
    "GCP": "Google Cloud Platform",
    "Azure": "Microsoft Azure",
    "K8s": "Kubernetes",
    "IaC": "Infrastructure as Code",
    "CI/CD": "Continuous Integration/Continuous Deployment",
    "VM": "Virtual Machine",
    "EC2": "Elastic Compute Cloud",
    "S3": "Simple Storage Service",
    "IAM": "Identity and Access Management",
    # AI & machine learning
    "ML": "Machine Learning",
    "AI": "Artificial Intelligence",
    "DL": "Deep Learning",
    "NLP": "Natural Language Processing",
    "CV": "Computer Vision",
    "RL": "Reinforcement Learning",
    "RAG": "Retrieval Augmented Generation",
    "LLM": "Large Language Model",
    "CNN": "Convolutional Neural Network",
    "RNN": "Recurrent Neural Network",
    # Programming & development
    "JS": "JavaScript",
    "TS": "TypeScript",
    "OOP": "Object-Oriented Programming",
    "FP": "Functional Programming",
    "API": "Application Programming Interface",
    "REST": "Representational State Transfer",
    "SOAP": "Simple Object Access Protocol",
    "SQL": "Structured Query Language",
    "NoSQL": "Not Only SQL",
    "ORM": "Object-Relational Mapping",
    "IDE": "Integrated Development Environment",
    "SDK": "Software Development Kit",
    "UI": "User Interface",
    "UX": "User Experience",
    "CSS": "Cascading Style Sheets",
    "HTML": "HyperText Markup Language",
    "DOM": "Document Object Model",
    "TF": "TensorFlow",
    "PT": "PyTorch",
    # DevOps & SRE
    "SRE": "Site Reliability Engineering",
    "SLA": "Service Level Agreement",
    "SLO": "Service Level Objective",
    "SLI": "Service Level Indicator",
    # Data
    "ETL": "Extract, Transform, Load",
    "ELT": "Extract, Load, Transform",
    "BI": "Business Intelligence",
    "DW": "Data Warehouse",
    "OLAP": "Online Analytical Processing",
    "OLTP": "Online Transaction Processing",
    "RDBMS": "Relational Database Management System",
    "DB": "Database",
    "ACID": "Atomicity, Consistency, Isolation, Durability",
    # Methodologies
    "XP": "Extreme Programming",
    "TDD": "Test-Driven Development",
    "BDD": "Behavior-Driven Development",
    "DDD": "Domain-Driven Design",
    # Security
    "SSO": "Single Sign-On",
    "MFA": "Multi-Factor Authentication",
    "2FA": "Two-Factor Authentication",
    "SIEM": "Security Information and Event Management",
    "GDPR": "General Data Protection Regulation",
    "HIPAA": "Health Insurance Portability and Accountability Act",
}


class AbbreviationTable:
    """Bidirectional lookup. Immutable once built; safe for concurrent reads."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        forward = {abbr.strip(): full.strip() for abbr, full in mapping.items()}
        reverse: Dict[str, str] = {}
        for abbr, full in forward.items():
            reverse.setdefault(full.lower(), abbr)
        self._forward: Mapping[str, str] = MappingProxyType(forward)
        self._reverse: Mapping[str, str] = MappingProxyType(reverse)

    def __contains__(self, abbreviation: object) -> bool:
        return isinstance(abbreviation, str) and abbreviation.strip() in self._forward

    def __len__(self) -> int:
        return len(self._forward)

    def full_form(self, abbreviation: str) -> Optional[str]:
        return self._forward.get((abbreviation or "").strip())

    def resolve(self, skill: str) -> str:
        """Full form of `skill` if it is a known abbreviation, else the trimmed input."""
        trimmed = (skill or "").strip()
        return self._forward.get(trimmed, trimmed)

    def abbreviation_of(self, full_name: str) -> str:
        """Abbreviation for a full form (case-insensitive), else the trimmed input."""
        trimmed = (full_name or "").strip()
        return self._reverse.get(trimmed.lower(), trimmed)


@lru_cache(maxsize=1)
def get_abbreviation_table() -> AbbreviationTable:
    """Process-wide table, built on first use."""
    return AbbreviationTable(ABBREVIATIONS)
