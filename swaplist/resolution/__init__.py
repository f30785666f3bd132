"""Wallet input resolution - domains and addresses."""

from .address import SNS_DOMAINS, clean_domain, is_domain, validate_address
from .sns import SNSResolver

__all__ = ["SNS_DOMAINS", "clean_domain", "is_domain", "validate_address", "SNSResolver"]
