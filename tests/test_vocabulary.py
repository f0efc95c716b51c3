import json

import pytest

from exam_review.errors import VocabularyError
from exam_review.vocabulary import DEFAULT_VOCABULARY, get_vocabulary, load_vocabulary


def test_default_vocabulary_has_no_duplicate_categories():
    assert len(DEFAULT_VOCABULARY.categories) == len(set(DEFAULT_VOCABULARY.categories))
    assert DEFAULT_VOCABULARY.categories.count("Systems Manager") == 1


def test_default_vocabulary_domains():
    assert set(DEFAULT_VOCABULARY.domains) == {
        "Development with AWS Services",
        "Security",
        "Deployment",
        "Troubleshooting and Optimization",
    }
    assert set(DEFAULT_VOCABULARY.security_categories) == {"IAM", "KMS", "Cognito", "Secrets Manager"}


def test_load_vocabulary(tmp_path):
    path = tmp_path / "vocab.json"
    path.write_text(json.dumps({
        "name": "Azure AZ-204",
        "categories": ["Functions", "Cosmos DB", "Functions"],
        "domains": {"Compute": ["Functions"]},
        "keywords": ["durable"],
    }))
    vocab = load_vocabulary(path)
    assert vocab.name == "Azure AZ-204"
    assert vocab.categories == ("Functions", "Cosmos DB")
    assert vocab.domains == {"Compute": ("Functions",)}


def test_load_vocabulary_missing_file(tmp_path):
    with pytest.raises(VocabularyError):
        load_vocabulary(tmp_path / "nope.json")


def test_load_vocabulary_invalid(tmp_path):
    path = tmp_path / "vocab.json"
    path.write_text(json.dumps({"name": "no categories"}))
    with pytest.raises(VocabularyError):
        load_vocabulary(path)

    path.write_text("{not json")
    with pytest.raises(VocabularyError):
        load_vocabulary(path)


def test_get_vocabulary_default():
    assert get_vocabulary() is DEFAULT_VOCABULARY


def test_get_vocabulary_from_settings(tmp_path, monkeypatch):
    path = tmp_path / "vocab.json"
    path.write_text(json.dumps({"name": "Custom", "categories": ["Widget"]}))
    monkeypatch.setenv("VOCABULARY_PATH", str(path))
    from exam_review.config import get_settings
    get_settings.cache_clear()

    assert get_vocabulary().name == "Custom"
