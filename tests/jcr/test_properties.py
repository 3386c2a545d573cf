"""Tests for property transferability rules."""

from __future__ import annotations

import itertools
import logging

import pytest

from grabbit.jcr import (
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

ALL_OWNERS = [
    NodeClassification(is_authorizable_type=a, is_access_control_type=c)
    for a, c in itertools.product([False, True], repeat=2)
]
CONTENT_NODE = NodeClassification()
AUTHORIZABLE_NODE = NodeClassification(is_authorizable_type=True)
ACCESS_CONTROL_NODE = NodeClassification(is_access_control_type=True)


class TestIsTransferable:
    """Tests for is_transferable()."""

    @pytest.mark.parametrize(
        ("name", "protected", "authorizable", "access_control", "expected"),
        [
            ("jcr:lastModified", True, False, False, False),
            ("jcr:primaryType", False, False, False, True),
            ("jcr:mixinTypes", False, False, False, True),
            ("otherProperty", True, False, False, False),
            ("otherProperty", False, False, False, True),
            ("protectedProperty", True, True, False, True),
            ("rep:privileges", True, False, True, True),
        ],
    )
    def test_known_properties(
        self,
        name: str,
        protected: bool,
        authorizable: bool,
        access_control: bool,
        expected: bool,
    ) -> None:
        """Known property/node combinations give the expected verdict."""
        prop = PropertyDescriptor(name=name, is_protected=protected)
        owner = NodeClassification(
            is_authorizable_type=authorizable, is_access_control_type=access_control
        )
        assert is_transferable(prop, owner) is expected

    @pytest.mark.parametrize("name", sorted(ALWAYS_TRANSFERABLE))
    @pytest.mark.parametrize("protected", [False, True])
    @pytest.mark.parametrize("owner", ALL_OWNERS)
    def test_structural_properties_always_transferable(
        self, name: str, protected: bool, owner: NodeClassification
    ) -> None:
        """Node type properties are transferred regardless of protection."""
        assert is_transferable(PropertyDescriptor(name, protected), owner) is True

    @pytest.mark.parametrize("owner", ALL_OWNERS)
    def test_unprotected_always_transferable(self, owner: NodeClassification) -> None:
        """Unprotected properties are transferred from any node."""
        assert is_transferable(PropertyDescriptor("jcr:title", False), owner) is True

    @pytest.mark.parametrize("owner", ALL_OWNERS)
    def test_protected_depends_on_owner(self, owner: NodeClassification) -> None:
        """Protected properties only survive on security sensitive nodes."""
        expected = owner.is_authorizable_type or owner.is_access_control_type
        assert is_transferable(PropertyDescriptor("rep:members", True), owner) is expected

    def test_structural_names(self) -> None:
        """Structural set is exactly the primary and mixin type properties."""
        assert ALWAYS_TRANSFERABLE == {JCR_PRIMARYTYPE, JCR_MIXINTYPES}


class TestTransferabilityDecider:
    """Tests for TransferabilityDecider."""

    def test_evaluate_returns_reason(self) -> None:
        """Evaluate returns the reason of the matching rule."""
        decider = TransferabilityDecider()
        transferable, reason = decider.evaluate(
            PropertyDescriptor("rep:privileges", True), ACCESS_CONTROL_NODE
        )
        assert transferable is True
        assert "access control" in reason

    def test_default_rejects_protected_content(self) -> None:
        """No matching rule means the property is not transferred."""
        decider = TransferabilityDecider()
        transferable, reason = decider.evaluate(
            PropertyDescriptor("jcr:created", True), CONTENT_NODE
        )
        assert transferable is False
        assert "content node" in reason

    def test_custom_rules(self) -> None:
        """Custom rules replace the default table."""
        decider = TransferabilityDecider(
            rules=[
                TransferabilityRule(
                    matches=lambda prop, owner: prop.name.startswith("cq:"),
                    transferable=False,
                    reason="Skip cq properties",
                )
            ]
        )
        assert decider.evaluate(PropertyDescriptor("cq:lastReplicated", False), CONTENT_NODE) == (
            False,
            "Skip cq properties",
        )
        # Falls through to the default verdict
        assert decider.evaluate(PropertyDescriptor("jcr:title", False), CONTENT_NODE)[0] is False

    def test_first_match_wins(self) -> None:
        """Structural rule wins over the protection rules."""
        decider = TransferabilityDecider()
        _, reason = decider.evaluate(PropertyDescriptor(JCR_PRIMARYTYPE, True), CONTENT_NODE)
        assert "Node type" in reason


class TestFilterTransferable:
    """Tests for filter_transferable()."""

    def test_keeps_order_and_drops_protected(self) -> None:
        """Only transferable properties are yielded, in order."""
        properties = [
            PropertyDescriptor(JCR_PRIMARYTYPE, True),
            PropertyDescriptor("jcr:created", True),
            PropertyDescriptor("jcr:title", False),
            PropertyDescriptor("jcr:lastModified", True),
        ]
        result = list(filter_transferable(properties, CONTENT_NODE))
        assert [p.name for p in result] == [JCR_PRIMARYTYPE, "jcr:title"]

    def test_authorizable_keeps_protected(self) -> None:
        """Protected properties of a group are all kept."""
        properties = [
            PropertyDescriptor("rep:principalName", True),
            PropertyDescriptor("rep:members", True),
        ]
        assert list(filter_transferable(properties, AUTHORIZABLE_NODE)) == properties

    def test_logs_skipped_properties(self, caplog: pytest.LogCaptureFixture) -> None:
        """Skipped properties are logged at debug level."""
        caplog.set_level(logging.DEBUG, logger="grabbit")
        list(filter_transferable([PropertyDescriptor("jcr:created", True)], CONTENT_NODE))
        assert "Skipping property jcr:created" in caplog.text


class TestNodeClassification:
    """Tests for NodeClassification."""

    def test_defaults_to_content_node(self) -> None:
        """A default classification is neither identity nor ACL."""
        assert CONTENT_NODE.is_security_sensitive is False

    def test_security_sensitive(self) -> None:
        """Either flag marks the node as security sensitive."""
        assert AUTHORIZABLE_NODE.is_security_sensitive is True
        assert ACCESS_CONTROL_NODE.is_security_sensitive is True
