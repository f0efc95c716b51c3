"""
Category, domain and keyword tagging for exam questions.
문제 텍스트에서 서비스(카테고리), 도메인, 키워드를 태깅합니다.

Matching is plain substring search over the uppercased text. Overlapping
names do not suppress each other: "Systems Manager Parameter Store" tags
both "Systems Manager" and "Parameter Store".
"""

from .schema import Tags
from .vocabulary import Vocabulary, get_vocabulary


def match_categories(upper_text: str, vocabulary: Vocabulary) -> list[str]:
    qualifier = vocabulary.qualifier.upper()
    matched = []
    for category in vocabulary.categories:
        name = category.upper()
        if name in upper_text or (qualifier and f"{qualifier} {name}" in upper_text):
            matched.append(category)
    return matched


def match_domains(categories: list[str], vocabulary: Vocabulary) -> list[str]:
    found = {c.upper() for c in categories}
    return [
        domain
        for domain, members in vocabulary.domains.items()
        if any(member.upper() in found for member in members)
    ]


def match_keywords(upper_text: str, vocabulary: Vocabulary) -> list[str]:
    return [kw for kw in vocabulary.keywords if kw.upper() in upper_text]


def tag_question(text: str, vocabulary: Vocabulary | None = None) -> Tags:
    """Tag raw OCR text with matching categories, domains and keywords."""
    vocabulary = vocabulary or get_vocabulary()
    upper_text = text.upper()
    categories = match_categories(upper_text, vocabulary)
    return Tags(
        categories=categories,
        domains=match_domains(categories, vocabulary),
        keywords=match_keywords(upper_text, vocabulary),
    )
