"""
Reference vocabularies for category, domain and keyword tagging.
카테고리/도메인/키워드 태깅용 참조 어휘.

The built-in vocabulary targets the AWS Certified Developer - Associate
(DVA-C02) exam. Another exam can be supported by pointing VOCABULARY_PATH at
a JSON file with the same fields as ``Vocabulary``.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .config import get_settings
from .errors import VocabularyError

logger = logging.getLogger(__name__)


class Vocabulary(BaseModel):
    """Immutable tagging vocabulary"""

    model_config = ConfigDict(frozen=True)

    name: str
    qualifier: str = ""
    categories: tuple[str, ...]
    domains: dict[str, tuple[str, ...]] = {}
    keywords: tuple[str, ...] = ()
    security_categories: tuple[str, ...] = ()
    serverless_markers: tuple[str, ...] = ()

    @field_validator("categories", "keywords")
    @classmethod
    def _dedupe(cls, values: tuple[str, ...]) -> tuple[str, ...]:
        # dict.fromkeys keeps first-seen order
        return tuple(dict.fromkeys(v for v in values if v.strip()))


_AWS_SERVICES = (
    # Compute
    "EC2", "Lambda", "Elastic Beanstalk", "ECS", "EKS", "Fargate", "Lightsail",
    # Storage
    "S3", "EBS", "EFS", "FSx", "Storage Gateway", "Glacier",
    # Database
    "RDS", "DynamoDB", "ElastiCache", "Aurora", "DocumentDB", "Neptune", "Redshift", "MemoryDB",
    # Networking
    "VPC", "CloudFront", "Route 53", "API Gateway", "Direct Connect", "ELB", "ALB", "NLB",
    "Global Accelerator",
    # Security & Identity
    "IAM", "Cognito", "Secrets Manager", "KMS", "Systems Manager", "Parameter Store", "WAF",
    "Shield", "GuardDuty", "Inspector",
    # Messaging & Integration
    "SQS", "SNS", "EventBridge", "Step Functions", "SWF", "Amazon MQ", "Kinesis", "AppSync",
    # Developer Tools
    "CodeCommit", "CodeBuild", "CodeDeploy", "CodePipeline", "CodeArtifact", "CodeGuru", "X-Ray",
    "CloudFormation",
    # Monitoring & Logging
    "CloudWatch", "CloudTrail", "Config",
    # Containers
    "ECR", "App Runner",
    # Serverless
    "SAM", "Amplify",
)

_DVA_C02_DOMAINS = {
    "Development with AWS Services": (
        "Lambda", "API Gateway", "DynamoDB", "S3", "SQS", "SNS", "EventBridge", "Step Functions",
    ),
    "Security": (
        "IAM", "Cognito", "KMS", "Secrets Manager", "Parameter Store", "WAF", "X-Ray",
    ),
    "Deployment": (
        "CodeDeploy", "CodePipeline", "CodeBuild", "CodeCommit", "Elastic Beanstalk",
        "CloudFormation", "SAM",
    ),
    "Troubleshooting and Optimization": (
        "CloudWatch", "X-Ray", "CloudTrail", "ElastiCache", "DynamoDB", "Lambda",
    ),
}

_KEYWORDS = (
    "serverless", "microservices", "container", "scaling", "high availability",
    "fault tolerant", "cost optimization", "performance", "security", "encryption",
    "caching", "monitoring", "logging", "deployment", "CI/CD", "blue-green",
    "canary", "rollback", "throttling", "rate limiting", "CORS", "authentication",
    "authorization", "least privilege", "IAM role", "policy", "VPC", "subnet",
    "security group", "NACL", "queue", "topic", "event-driven", "asynchronous",
    "synchronous", "idempotent", "stateless", "stateful", "cold start",
)

DEFAULT_VOCABULARY = Vocabulary(
    name="AWS DVA-C02",
    qualifier="AWS",
    categories=_AWS_SERVICES,
    domains=_DVA_C02_DOMAINS,
    keywords=_KEYWORDS,
    security_categories=("IAM", "KMS", "Cognito", "Secrets Manager"),
    serverless_markers=("serverless", "lambda"),
)


def load_vocabulary(path: str | Path) -> Vocabulary:
    """Load a vocabulary from a JSON file.

    Raises:
        VocabularyError: file missing, not JSON, or missing required fields
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Vocabulary.model_validate(data)
    except FileNotFoundError as e:
        raise VocabularyError(f"Vocabulary file not found: {path}") from e
    except (json.JSONDecodeError, ValidationError) as e:
        raise VocabularyError(f"Invalid vocabulary file {path}: {e}") from e


@lru_cache()
def get_vocabulary() -> Vocabulary:
    """Return the configured vocabulary (cached)."""
    path = get_settings().VOCABULARY_PATH
    if not path:
        return DEFAULT_VOCABULARY
    vocabulary = load_vocabulary(path)
    logger.info("Loaded vocabulary '%s' from %s (%d categories)", vocabulary.name, path, len(vocabulary.categories))
    return vocabulary
