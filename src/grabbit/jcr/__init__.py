"""Content repository rules applied while walking a subtree."""

from grabbit.jcr.properties import (
    ALWAYS_TRANSFERABLE,
    JCR_MIXINTYPES,
    JCR_PRIMARYTYPE,
    NodeClassification,
    PropertyDescriptor,
    TransferabilityDecider,
    TransferabilityRule,
    filter_transferable,
    is_transferable,
)

__all__ = [
    "ALWAYS_TRANSFERABLE",
    "JCR_MIXINTYPES",
    "JCR_PRIMARYTYPE",
    "NodeClassification",
    "PropertyDescriptor",
    "TransferabilityDecider",
    "TransferabilityRule",
    "filter_transferable",
    "is_transferable",
]
