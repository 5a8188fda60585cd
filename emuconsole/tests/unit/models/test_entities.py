"""Tests for snapshot entity models."""

from __future__ import annotations

import base64

import pytest
from pydantic import ValidationError

from emuconsole.constants.enums import ViewName
from emuconsole.models.entities import (
    BucketSummary,
    DashboardSnapshot,
    OriginSummary,
    PeekMessage,
    PubSubSnapshot,
    QueueAttributes,
    QueueListSnapshot,
    QueueSummary,
    SnapshotEntity,
    SubscriptionSummary,
    TopicSummary,
    parse_snapshot,
)


class TestQueueSummary:
    """Tests for QueueSummary."""

    def test_natural_key_is_queue_url(self) -> None:
        queue = QueueSummary(queue_name="jobs", queue_url="http://q/000/jobs")
        assert queue.natural_key == "http://q/000/jobs"

    def test_resolved_queue_id_defaults_to_base64_url(self) -> None:
        queue = QueueSummary(queue_name="jobs", queue_url="http://q/000/jobs")
        assert queue.resolved_queue_id == base64.b64encode(b"http://q/000/jobs").decode()

    def test_explicit_queue_id_wins(self) -> None:
        queue = QueueSummary(queue_name="jobs", queue_url="http://q/jobs", queue_id="abc")
        assert queue.resolved_queue_id == "abc"

    def test_unknown_fields_kept_and_not_rendered(self) -> None:
        queue = QueueSummary.model_validate(
            {"queue_name": "jobs", "queue_url": "u", "region": "us-east-1", "messages": None}
        )
        assert queue.model_extra == {"region": "us-east-1"}
        assert queue.messages == []
        assert "region" not in queue.render_fields()

    def test_frozen(self) -> None:
        queue = QueueSummary(queue_name="jobs", queue_url="u")
        with pytest.raises(ValidationError):
            queue.visible_count = 4  # type: ignore[misc]


class TestDetailModels:
    """Tests for attribute and peek responses."""

    def test_attribute_values_become_strings(self) -> None:
        result = QueueAttributes.model_validate(
            {"attributes": {"VisibilityTimeout": 30, "RedrivePolicy": None}}
        )
        assert result.attributes == {"VisibilityTimeout": "30", "RedrivePolicy": ""}

    def test_null_attributes(self) -> None:
        assert QueueAttributes.model_validate({"attributes": None}).attributes == {}

    def test_peek_message_defaults(self) -> None:
        message = PeekMessage.model_validate({"message_id": "", "receive_count": None})
        assert message.message_id == "-"
        assert message.receive_count == 0


class TestPubSubModels:
    """Tests for topic and subscription entities."""

    def test_topic_name_from_arn(self) -> None:
        topic = TopicSummary(topic_arn="arn:aws:sns:us-east-1:000000000000:alerts")
        assert topic.topic_name == "alerts"
        assert topic.render_fields()["topic_name"] == "alerts"

    def test_display_name_preferred(self) -> None:
        topic = TopicSummary(topic_arn="arn:x:alerts", display_name="Alerts")
        assert topic.topic_name == "Alerts"

    def test_subscription_key(self) -> None:
        subscription = SubscriptionSummary(subscription_arn="arn:s:1", protocol="http")
        assert subscription.natural_key == "arn:s:1"

    def test_snapshot_null_lists(self) -> None:
        snapshot = PubSubSnapshot.model_validate({"topics": None, "subscriptions": None})
        assert snapshot.topics == []
        assert snapshot.subscriptions == []
        assert snapshot.stats.topics == 0


class TestOtherEntities:
    """Tests for dashboard, bucket and origin entities."""

    def test_service_stats(self) -> None:
        snapshot = DashboardSnapshot.model_validate(
            {"services": [{"name": "ess-queue-ess", "status": "online", "stats": [{"label": "Queues", "value": 2}]}]}
        )
        service = snapshot.services[0]
        assert service.natural_key == "ess-queue-ess"
        assert service.is_online
        assert service.render_fields() == {"status": "online", "stats": (("Queues", 2),)}

    def test_bucket_and_origin_keys(self) -> None:
        assert BucketSummary(name="assets").natural_key == "assets"
        assert OriginSummary(origin_id="o-1", domain_name="cdn.test").natural_key == "o-1"
        assert OriginSummary(origin_id="o-1").render_fields()["signature_required"] is False

    def test_base_entity_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            SnapshotEntity()


class TestParseSnapshot:
    """Tests for parse_snapshot."""

    def test_model_per_view(self) -> None:
        assert isinstance(parse_snapshot(ViewName.QUEUES, {"queues": []}), QueueListSnapshot)
        assert isinstance(parse_snapshot(ViewName.DASHBOARD, {}), DashboardSnapshot)
        assert isinstance(parse_snapshot(ViewName.PUBSUB, {}), PubSubSnapshot)

    def test_schema_mismatch_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_snapshot(ViewName.QUEUES, {"queues": [{"queue_name": "missing url"}]})
