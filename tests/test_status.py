"""Tests for the Wave to canonical status mapping."""

import pytest

from wave_adapter.connectors.base import AttemptStatus, RefundStatus
from wave_adapter.connectors.wave.status import (
    WavePaymentStatus,
    WaveRefundStatus,
    map_payment_status,
    map_refund_status,
)


class TestPaymentStatusMapping:
    """Tests for map_payment_status."""

    @pytest.mark.parametrize("wave_status,expected", [
        (WavePaymentStatus.CREATED, AttemptStatus.PENDING),
        (WavePaymentStatus.PENDING, AttemptStatus.PENDING),
        (WavePaymentStatus.COMPLETED, AttemptStatus.CHARGED),
        (WavePaymentStatus.FAILED, AttemptStatus.FAILURE),
        (WavePaymentStatus.CANCELLED, AttemptStatus.VOIDED),
    ])
    def test_maps_each_status(self, wave_status, expected):
        """Test every Wave payment status maps to its canonical bucket."""
        assert map_payment_status(wave_status) == expected

    def test_mapping_is_total(self):
        """Test all five Wave statuses land in the four canonical buckets."""
        targets = {map_payment_status(s) for s in WavePaymentStatus}
        assert len(list(WavePaymentStatus)) == 5
        assert targets == set(AttemptStatus)

    def test_parses_wire_values(self):
        """Test wire strings parse into the enum."""
        assert WavePaymentStatus("completed") is WavePaymentStatus.COMPLETED
        with pytest.raises(ValueError):
            WavePaymentStatus("succeeded")


class TestRefundStatusMapping:
    """Tests for map_refund_status."""

    @pytest.mark.parametrize("wave_status,expected", [
        (WaveRefundStatus.PROCESSING, RefundStatus.PENDING),
        (WaveRefundStatus.COMPLETED, RefundStatus.SUCCESS),
        (WaveRefundStatus.FAILED, RefundStatus.FAILURE),
        (WaveRefundStatus.CANCELLED, RefundStatus.FAILURE),
    ])
    def test_maps_each_status(self, wave_status, expected):
        """Test every Wave refund status maps to its canonical bucket."""
        assert map_refund_status(wave_status) == expected

    def test_mapping_is_total(self):
        """Test all four Wave refund statuses land in the three canonical buckets."""
        targets = {map_refund_status(s) for s in WaveRefundStatus}
        assert targets == set(RefundStatus)
