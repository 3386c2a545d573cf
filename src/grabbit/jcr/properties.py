"""Property transferability rules.

While a subtree is walked, every property of every node is checked here
before it is serialized for the client.

Rules (first match wins):
| Property name          | Protected | Owner node                   | Transferable |
|------------------------|-----------|------------------------------|--------------|
| jcr:primaryType/mixins | *         | *                            | yes          |
| *                      | no        | *                            | yes          |
| *                      | yes       | authorizable or access ctrl  | yes          |
| *                      | yes       | plain content                | no           |

Protected properties on users, groups and ACL entries (group members,
privileges) are security state; dropping them would leave the client
with a different permission model than the server.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

JCR_PRIMARYTYPE = "jcr:primaryType"
JCR_MIXINTYPES = "jcr:mixinTypes"

# Structural properties that are written even though the repository protects them
ALWAYS_TRANSFERABLE: frozenset[str] = frozenset({JCR_PRIMARYTYPE, JCR_MIXINTYPES})


@dataclass(frozen=True)
class PropertyDescriptor:
    """A property considered for transfer.

    Attributes:
        name: Property name, unique within its node.
        is_protected: Whether the repository manages this property itself.
    """

    name: str
    is_protected: bool


@dataclass(frozen=True)
class NodeClassification:
    """Security classification of the node owning a property.

    Attributes:
        is_authorizable_type: Node is a user or group.
        is_access_control_type: Node is an access control entry or list.
    """

    is_authorizable_type: bool = False
    is_access_control_type: bool = False

    @property
    def is_security_sensitive(self) -> bool:
        """Check if the node carries identity or permission state."""
        return self.is_authorizable_type or self.is_access_control_type


@dataclass(frozen=True)
class TransferabilityRule:
    """A rule in the transferability table."""

    matches: Callable[[PropertyDescriptor, NodeClassification], bool]
    transferable: bool
    reason: str


# Declarative transferability rules
TRANSFERABILITY_RULES: tuple[TransferabilityRule, ...] = (
    TransferabilityRule(
        matches=lambda prop, owner: prop.name in ALWAYS_TRANSFERABLE,
        transferable=True,
        reason="Node type information is always written",
    ),
    TransferabilityRule(
        matches=lambda prop, owner: not prop.is_protected,
        transferable=True,
        reason="Unprotected property",
    ),
    TransferabilityRule(
        matches=lambda prop, owner: owner.is_security_sensitive,
        transferable=True,
        reason="Protected property on an authorizable or access control node",
    ),
)


class TransferabilityDecider:
    """Evaluates transferability rules for one property."""

    def __init__(self, rules: Iterable[TransferabilityRule] | None = None) -> None:
        self._rules = tuple(TRANSFERABILITY_RULES if rules is None else rules)

    def evaluate(
        self, prop: PropertyDescriptor, owner: NodeClassification
    ) -> tuple[bool, str]:
        """Evaluate rules and return verdict with reason.

        Args:
            prop: The property being walked.
            owner: Classification of the node owning the property.

        Returns:
            (transferable, reason) tuple
        """
        for rule in self._rules:
            if rule.matches(prop, owner):
                return rule.transferable, rule.reason

        # Default: protected content the client repository would regenerate
        return False, "Protected property on a content node"


_DEFAULT_DECIDER = TransferabilityDecider()


def is_transferable(prop: PropertyDescriptor, owner: NodeClassification) -> bool:
    """Quick transferability lookup.

    Args:
        prop: The property being walked.
        owner: Classification of the node owning the property.

    Returns:
        True if the property should be sent to the client.
    """
    transferable, _ = _DEFAULT_DECIDER.evaluate(prop, owner)
    return transferable


def filter_transferable(
    properties: Iterable[PropertyDescriptor], owner: NodeClassification
) -> Iterator[PropertyDescriptor]:
    """Yield the transferable properties of one node, in order.

    Args:
        properties: Properties of the node.
        owner: Classification of that node.
    """
    for prop in properties:
        transferable, reason = _DEFAULT_DECIDER.evaluate(prop, owner)
        if transferable:
            yield prop
        else:
            logger.debug("Skipping property %s: %s", prop.name, reason)
